import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run tests marked as integration",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--integration"):
        return

    for item in items:
        if "integration" in item.keywords:
            item.add_marker(
                pytest.mark.skip(
                    reason="need --integration option to run integration tests"
                )
            )


@pytest.fixture
def make_target():
    from deepsky.planner.enums import Constellation, DSOCatalog, DSOType
    from deepsky.planner.types import DeepSkyTarget, Designation

    def _make(
        id="t1",
        ra_deg=0.0,
        dec_deg=0.0,
        arc_length=10.0,
        arc_width=None,
        apparent_mag=None,
        types=(DSOType.SPIRAL_GALAXY,),
        constellation=Constellation.ANDROMEDA,
        names=(),
        designations=None,
        sub_designations=(),
    ):
        if designations is None:
            designations = (Designation(DSOCatalog.NGC, sum(map(ord, id))),)
        return DeepSkyTarget(
            id=id,
            names=tuple(names),
            designations=tuple(designations),
            sub_designations=tuple(sub_designations),
            ra_deg=ra_deg,
            dec_deg=dec_deg,
            arc_length=arc_length,
            arc_width=arc_length if arc_width is None else arc_width,
            apparent_mag=apparent_mag,
            types=tuple(types),
            constellation=constellation,
        )

    return _make
