
from geodesics import GeodesicMask


def test_output_masks_carry_capabilities():
    assert GeodesicMask.LATITUDE & GeodesicMask.CAP_MASK == GeodesicMask.CAP_NONE
    assert GeodesicMask.LONGITUDE & GeodesicMask.CAP_MASK == GeodesicMask.CAP_C3
    assert GeodesicMask.DISTANCE & GeodesicMask.CAP_MASK == GeodesicMask.CAP_C1
    assert GeodesicMask.DISTANCE_IN & GeodesicMask.CAP_MASK == (
        GeodesicMask.CAP_C1 | GeodesicMask.CAP_C1p
    )
    assert GeodesicMask.REDUCEDLENGTH & GeodesicMask.CAP_MASK == (
        GeodesicMask.CAP_C1 | GeodesicMask.CAP_C2
    )
    assert GeodesicMask.GEODESICSCALE & GeodesicMask.CAP_MASK == (
        GeodesicMask.CAP_C1 | GeodesicMask.CAP_C2
    )
    assert GeodesicMask.AREA & GeodesicMask.CAP_MASK == GeodesicMask.CAP_C4


def test_composite_masks():
    assert GeodesicMask.STANDARD == (
        GeodesicMask.LATITUDE | GeodesicMask.LONGITUDE
        | GeodesicMask.AZIMUTH | GeodesicMask.DISTANCE
    )
    assert GeodesicMask.ALL == GeodesicMask.OUT_ALL | GeodesicMask.CAP_ALL
    assert not GeodesicMask.ALL & GeodesicMask.LONG_UNROLL
    assert GeodesicMask.OUT_MASK == GeodesicMask.OUT_ALL | GeodesicMask.LONG_UNROLL
    assert GeodesicMask.EMPTY == 0
