"""Unit tests for the viewport controller."""

import pytest

from orgtree.core.viewport import ViewportController, ViewportState


class TestZoom:
    def test_zoom_clamped_high(self):
        vp = ViewportController()
        vp.zoom_to(10)
        assert vp.scale == 2.0

    def test_zoom_clamped_low(self):
        vp = ViewportController()
        vp.zoom_to(-5)
        assert vp.scale == 0.2

    def test_zoom_by_delta(self):
        vp = ViewportController()
        vp.zoom_by(0.5)
        assert vp.scale == pytest.approx(1.5)
        vp.zoom_by(5)
        assert vp.scale == 2.0

    def test_zoom_steps(self):
        vp = ViewportController(zoom_step=0.1)
        vp.zoom_in()
        vp.zoom_in()
        assert vp.scale == pytest.approx(1.2)
        vp.zoom_out()
        assert vp.scale == pytest.approx(1.1)

    def test_custom_bounds(self):
        vp = ViewportController(min_scale=0.5, max_scale=1.5)
        assert vp.zoom_to(3).scale == 1.5
        assert vp.zoom_to(0.1).scale == 0.5

    def test_initial_state_is_clamped(self):
        vp = ViewportController(state=ViewportState(scale=9))
        assert vp.scale == 2.0

    @pytest.mark.parametrize("low,high", [(0, 1), (-1, 1), (2, 1)])
    def test_invalid_bounds(self, low, high):
        with pytest.raises(ValueError):
            ViewportController(min_scale=low, max_scale=high)


class TestPan:
    def test_pan_accumulates(self):
        vp = ViewportController()
        vp.pan(10, -5)
        state = vp.pan(2.5, 5)
        assert (state.pan_x, state.pan_y) == (12.5, 0)

    def test_reset(self):
        vp = ViewportController()
        vp.pan(100, 100)
        vp.zoom_to(1.7)
        assert vp.reset() == ViewportState(0.0, 0.0, 1.0)

    def test_state_is_replaced_not_mutated(self):
        vp = ViewportController()
        before = vp.state
        vp.pan(1, 1)
        assert before == ViewportState()


class TestCenterAndFit:
    def test_center_narrow_content(self):
        vp = ViewportController(margin=40)
        state = vp.center_on(500, 300, 1000, 800)
        assert (state.pan_x, state.pan_y) == (250, 40)

    def test_center_accounts_for_scale(self):
        vp = ViewportController(margin=40)
        vp.zoom_to(0.5)
        assert vp.center_on(1000, 300, 1000, 800).pan_x == 250

    def test_wide_content_pinned_to_margin(self):
        vp = ViewportController(margin=40)
        assert vp.center_on(2000, 300, 1000, 800).pan_x == 40

    def test_fit(self):
        vp = ViewportController(margin=40)
        state = vp.fit(2000, 1000, 1000, 600)

        assert state.scale == pytest.approx(0.46)
        assert state.pan_x == pytest.approx(40)
        assert state.pan_y == 40

    def test_fit_respects_max_scale(self):
        vp = ViewportController(margin=0)
        state = vp.fit(100, 100, 1000, 1000)
        assert state.scale == 2.0
        assert state.pan_x == 400

    def test_fit_empty_content(self):
        vp = ViewportController()
        assert vp.fit(0, 0, 800, 600).scale == 1.0


class TestTransform:
    def test_round_trip(self):
        vp = ViewportController()
        vp.zoom_to(1.5)
        vp.pan(30, 40)
        sx, sy = vp.to_screen(100, 200)

        assert (sx, sy) == (180, 340)
        assert vp.to_diagram(sx, sy) == pytest.approx((100, 200))

    def test_transform_attribute(self):
        vp = ViewportController()
        assert vp.transform() == "translate(0 0) scale(1)"
        vp.pan(12.5, 40)
        vp.zoom_to(0.75)
        assert vp.transform() == "translate(12.5 40) scale(0.75)"
