"""
Tests for the edit pipeline and its state machine.
"""

import pytest
from PIL import Image

from AIG_Libs.errors import ValidationError
from AIG_Libs.ImageEditingLib.edit_pipeline import (
    STATE_DIRTY,
    STATE_UNEDITED,
    EditSession,
    apply_edits,
)
from AIG_Libs.ImageEditingLib.image_models import EditParameters, ShapeSettings


class TestApplyEdits:
    def test_defaults_return_identical_pixels(self, gradient_image, default_params):
        result = apply_edits(gradient_image, default_params)

        assert result.tobytes() == gradient_image.tobytes()

    def test_source_is_not_modified(self, gradient_image):
        before = gradient_image.tobytes()

        apply_edits(gradient_image, EditParameters(brightness=0.3, shape=ShapeSettings(kind="circle")))

        assert gradient_image.tobytes() == before

    def test_applying_twice_equals_applying_once(self, gradient_image):
        params = EditParameters(brightness=0.2, contrast=0.1)

        once = apply_edits(gradient_image, params)
        twice = apply_edits(gradient_image, params)

        assert once.tobytes() == twice.tobytes()


class TestEditSession:
    def test_starts_unedited_without_source(self):
        session = EditSession()

        assert session.state == STATE_UNEDITED
        assert not session.has_source
        assert session.edited_image is None

    def test_load_new_source(self, gradient_image):
        session = EditSession()

        session.load_new_source(gradient_image)

        assert session.has_source
        assert session.state == STATE_UNEDITED
        assert session.edited_image.tobytes() == gradient_image.tobytes()

    def test_apply_changes_marks_dirty(self, solid_image):
        session = EditSession(solid_image)

        session.apply_changes(EditParameters(brightness=0.1))

        assert session.state == STATE_DIRTY
        assert session.parameters.brightness == 0.1

    def test_default_params_keep_unedited(self, solid_image):
        session = EditSession(solid_image)

        session.apply_changes(EditParameters())

        assert session.state == STATE_UNEDITED

    def test_returning_to_defaults_stays_dirty_until_reset(self, solid_image):
        session = EditSession(solid_image)
        session.apply_changes(EditParameters(hue=0.2))

        session.apply_changes(EditParameters())
        assert session.state == STATE_DIRTY

        session.reset()
        assert session.state == STATE_UNEDITED

    def test_edits_are_computed_from_source(self):
        image = Image.new("RGBA", (4, 4), (100, 100, 100, 255))
        session = EditSession(image)

        session.apply_changes(EditParameters(brightness=0.2))
        session.apply_changes(EditParameters(brightness=0.2))

        assert session.edited_image.getpixel((0, 0)) == (151, 151, 151, 255)

    def test_reset_restores_source(self, solid_image):
        session = EditSession(solid_image)
        session.apply_changes(EditParameters(saturation=-1.0))

        result = session.reset()

        assert result.tobytes() == solid_image.tobytes()
        assert session.parameters.is_default()

    def test_load_new_source_resets_edits(self, solid_image, gradient_image):
        session = EditSession(solid_image)
        session.apply_changes(EditParameters(contrast=0.4))

        session.load_new_source(gradient_image)

        assert session.state == STATE_UNEDITED
        assert session.parameters.is_default()
        assert session.edited_image.size == gradient_image.size

    def test_apply_without_source_raises(self):
        with pytest.raises(ValidationError):
            EditSession().apply_changes(EditParameters(brightness=0.1))

    def test_reset_without_source_raises(self):
        with pytest.raises(ValidationError):
            EditSession().reset()

    def test_apply_rejects_wrong_type(self, solid_image):
        with pytest.raises(TypeError):
            EditSession(solid_image).apply_changes({"brightness": 0.1})

    def test_snapshot_is_independent(self, solid_image):
        session = EditSession(solid_image)

        snapshot = session.snapshot()
        snapshot.putpixel((0, 0), (0, 0, 0, 0))

        assert session.edited_image.getpixel((0, 0)) == solid_image.getpixel((0, 0))
