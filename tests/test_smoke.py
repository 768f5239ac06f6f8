"""Smoke test to verify the toolchain works."""


def test_import_ride_tracking():
    """Verify the ride_tracking package can be imported."""
    import ride_tracking

    assert ride_tracking is not None


def test_subpackages_importable():
    """Verify all subpackages can be imported."""
    import ride_tracking.animation
    import ride_tracking.geo
    import ride_tracking.render
    import ride_tracking.route
    import ride_tracking.session
    import ride_tracking.timing

    assert ride_tracking.geo is not None
    assert ride_tracking.animation is not None
    assert ride_tracking.route is not None
    assert ride_tracking.timing is not None
    assert ride_tracking.render is not None
    assert ride_tracking.session is not None
