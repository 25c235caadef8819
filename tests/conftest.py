import pytest

from stormrank.models import StormRecord


STORM_CSV = """EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP
TORNADO,1,10,1,K,0,
FLASH FLOOD,0,2,5,M,1,K
tornado f3,2,5,0,,0,
VOLCANIC ASH,0,0,0,,0,
"""


@pytest.fixture
def scenario_records():
    return [
        StormRecord("TORNADO", fatalities=1, injuries=10, prop_dmg=1, prop_dmg_exp="K", crop_dmg=0, crop_dmg_exp=None),
        StormRecord("FLASH FLOOD", fatalities=0, injuries=2, prop_dmg=5, prop_dmg_exp="M", crop_dmg=1, crop_dmg_exp="K"),
        StormRecord("tornado f3", fatalities=2, injuries=5, prop_dmg=0, prop_dmg_exp=None, crop_dmg=0, crop_dmg_exp=None),
    ]


@pytest.fixture
def storm_csv(tmp_path):
    path = tmp_path / "StormData.csv"
    path.write_text(STORM_CSV, encoding="utf-8")
    return path
