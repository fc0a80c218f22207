import pandas as pd
import pytest

from storm_analytics.data.loader import iter_raw_records, load_storm_csv
from storm_analytics.data.schemas import RawRecord
from storm_analytics.errors import DatasetError


def test_selects_and_renames_the_five_columns(example_csv):
    result = load_storm_csv(example_csv)
    assert list(result.df.columns) == [
        "event_type", "damage_magnitude", "damage_unit", "fatalities", "injuries",
    ]
    assert result.total_rows == 3
    assert result.malformed_rows == 0


def test_event_type_text_is_kept_verbatim(example_csv):
    df = load_storm_csv(example_csv).df
    assert df["event_type"].tolist() == ["Tornado", "TORNADO ", "Flood"]


def test_malformed_rows_are_dropped_and_counted(write_storm_csv):
    path = write_storm_csv([
        ("TX", "HAIL", 1.0, "K", 0, 0),
        ("TX", "", 1.0, "K", 0, 0),            # blank event type
        ("TX", "HAIL", "abc", "K", 0, 0),      # non-numeric magnitude
        ("TX", "HAIL", 2.0, "K", -1, 0),       # negative fatalities
        ("TX", "HAIL", 3.0, "K", 0, None),     # missing injuries
    ])
    result = load_storm_csv(path)
    assert result.total_rows == 5
    assert result.malformed_rows == 4
    assert len(result.df) == 1
    assert result.df["injuries"].dtype == "int64"


def test_blank_damage_unit_is_kept_as_empty_string(write_storm_csv):
    path = write_storm_csv([("AL", "TSTM WIND", 0, None, 0, 0)])
    df = load_storm_csv(path).df
    assert df.loc[0, "damage_unit"] == ""


def test_reads_compressed_input(tmp_path):
    path = tmp_path / "storm.csv.bz2"
    pd.DataFrame({
        "EVTYPE": ["TORNADO"], "PROPDMG": [25.0], "PROPDMGEXP": ["K"],
        "FATALITIES": [0], "INJURIES": [2],
    }).to_csv(path, index=False)
    assert len(load_storm_csv(path).df) == 1


def test_missing_file_raises_file_not_found(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_storm_csv(tmp_path / "nope.csv")


def test_missing_required_column_raises_dataset_error(tmp_path):
    path = tmp_path / "bad.csv"
    pd.DataFrame({"EVTYPE": ["HAIL"], "PROPDMG": [1.0]}).to_csv(path, index=False)
    with pytest.raises(DatasetError):
        load_storm_csv(path)


def test_empty_file_raises_dataset_error(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(DatasetError):
        load_storm_csv(path)


def test_iter_raw_records(example_csv):
    records = list(iter_raw_records(load_storm_csv(example_csv).df))
    assert records[0] == RawRecord("Tornado", 5.0, "K", 1, 10)
    assert isinstance(records[2].injuries, int)


def test_fractional_casualty_count_is_malformed(write_storm_csv):
    path = write_storm_csv([
        ("OK", "TORNADO", 1, "K", 0, 1.9),
        ("OK", "TORNADO", 1, "K", 2.5, 0),
        ("OK", "TORNADO", 1, "K", 3.0, 4),
    ])
    result = load_storm_csv(path)
    assert result.malformed_rows == 2
    assert result.df["fatalities"].tolist() == [3]
    assert result.df["injuries"].tolist() == [4]
