import pandas as pd
import pytest

from stormrank.loader import load_storm_data, records_from_frame
from stormrank.engine import StormRank
from stormrank.models import StormRecord


class TestLoadStormData:

    def test_reads_csv(self, storm_csv):
        records = load_storm_data(str(storm_csv))
        assert len(records) == 4
        assert records[0] == StormRecord("TORNADO", 1.0, 10.0, 1.0, "K", 0.0, None)
        assert records[1].crop_dmg_exp == "K"

    def test_blank_codes_are_none(self, storm_csv):
        records = load_storm_data(str(storm_csv))
        assert records[2].prop_dmg_exp is None
        assert records[2].crop_dmg_exp is None

    def test_reads_bz2(self, tmp_path, storm_csv):
        path = tmp_path / "StormData.csv.bz2"
        pd.read_csv(storm_csv, dtype=str).to_csv(path, index=False, compression="bz2")
        assert len(load_storm_data(str(path))) == 4

    def test_reads_xlsx(self, tmp_path):
        pytest.importorskip("openpyxl")
        path = tmp_path / "StormData.xlsx"
        pd.DataFrame({
            "EVTYPE": ["TORNADO", "HAIL"],
            "FATALITIES": [1, 0],
            "INJURIES": [2, 0],
            "PROPDMG": [3, 0.5],
            "PROPDMGEXP": ["K", None],
            "CROPDMG": [0, 0],
            "CROPDMGEXP": [None, None],
        }).to_excel(path, index=False)
        records = load_storm_data(str(path))
        assert records == [
            StormRecord("TORNADO", 1.0, 2.0, 3.0, "K", 0.0, None),
            StormRecord("HAIL", 0.0, 0.0, 0.5, None, 0.0, None),
        ]

    def test_na_like_labels_are_kept(self, tmp_path):
        path = tmp_path / "StormData.csv"
        path.write_text(
            "EVTYPE,FATALITIES,INJURIES,PROPDMG,PROPDMGEXP,CROPDMG,CROPDMGEXP\n"
            ",1,0,0,,0,\n"
            "NA,1,0,0,,0,\n"
            "null,1,0,0,,0,\n",
            encoding="utf-8",
        )
        records = load_storm_data(str(path))
        assert [r.event_label for r in records] == ["", "NA", "null"]
        assert records[1].prop_dmg_exp is None
        assert StormRank(records=records).category_counts() == {"": 1, "Na": 1, "Null": 1}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_storm_data(str(tmp_path / "nope.csv"))


class TestRecordsFromFrame:

    def test_tolerant_column_names(self):
        df = pd.DataFrame({
            "event_type": ["Hail"],
            "Deaths": [0],
            "injuries": [1],
            "prop_dmg": [2],
            "prop_dmg_exp": ["m"],
            "crop_dmg": [None],
            "crop_dmg_exp": [None],
            "STATE": ["KS"],
        })
        assert records_from_frame(df) == [StormRecord("Hail", 0.0, 1.0, 2.0, "m", 0.0, None)]

    def test_unparsable_numbers_become_zero(self):
        df = pd.DataFrame({
            "EVTYPE": [" FLOOD "], "FATALITIES": ["?"], "INJURIES": [""],
            "PROPDMG": ["1.5"], "PROPDMGEXP": [" "], "CROPDMG": ["x"], "CROPDMGEXP": ["?"],
        })
        rec = records_from_frame(df)[0]
        assert rec == StormRecord("FLOOD", 0.0, 0.0, 1.5, None, 0.0, "?")

    def test_missing_column(self):
        df = pd.DataFrame({"EVTYPE": ["HAIL"]})
        with pytest.raises(KeyError, match="Missing required column"):
            records_from_frame(df)
