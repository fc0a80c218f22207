import pytest

from storm_analytics.config import CANONICAL_CATEGORIES
from storm_analytics.data.rules import RuleSet, clean_event_text, load_rules
from storm_analytics.errors import RulesetError


def test_canonical_table_has_48_distinct_categories():
    assert len(CANONICAL_CATEGORIES) == 48
    assert len(set(CANONICAL_CATEGORIES)) == 48


@pytest.mark.parametrize("raw, expected", [
    ("  TSTM   WIND ", "tstm wind"),
    ("Flash\tFlood", "flash flood"),
    ("", ""),
    (None, ""),
])
def test_clean_event_text(raw, expected):
    assert clean_event_text(raw) == expected


@pytest.mark.parametrize("label, category", [
    ("Tornado", "Tornado"),
    ("TORNADO ", "Tornado"),
    ("TORNADOES, TSTM WIND, HAIL", "Tornado"),
    ("TSTM WIND", "Thunderstorm Wind"),
    ("THUNDERSTORM WINDS", "Thunderstorm Wind"),
    ("DRY MICROBURST", "Thunderstorm Wind"),
    ("MARINE TSTM WIND", "Marine Thunderstorm Wind"),
    ("FLASH FLOODING", "Flash Flood"),
    ("URBAN/SML STREAM FLD", "Flood"),
    ("COASTAL FLOODING", "Coastal Flood"),
    ("STORM SURGE", "Storm Surge/Tide"),
    ("HURRICANE/TYPHOON", "Hurricane (Typhoon)"),
    ("EXTREME COLD/WIND CHILL", "Extreme Cold/Wind Chill"),
    ("HEAT WAVE", "Excessive Heat"),
    ("RIP CURRENTS", "Rip Current"),
    ("WILD/FOREST FIRE", "Wildfire"),
    ("LIGHTNING", "Lightning"),
    ("FREEZING RAIN", "Ice Storm"),
    ("ICY ROADS", "Winter Weather"),
    ("LANDSLIDE", "Debris Flow"),
    ("HIGH WINDS", "High Wind"),
    ("DENSE FOG", "Dense Fog"),
])
def test_shipped_ruleset_maps_common_variants(rules, label, category):
    assert rules.match(label) == category


@pytest.mark.parametrize("label", ["SUMMARY OF MARCH 14", "?", "", "   "])
def test_shipped_ruleset_leaves_noise_unmatched(rules, label):
    assert rules.match(label) is None


def test_shipped_ruleset_only_targets_canonical_categories(rules):
    assert set(rules.categories()) <= set(CANONICAL_CATEGORIES)


def test_first_matching_rule_wins():
    chill_first = RuleSet.from_pairs([
        ("wind chill", "Cold/Wind Chill", "substring"),
        ("wind", "High Wind", "substring"),
    ])
    wind_first = RuleSet.from_pairs([
        ("wind", "High Wind", "substring"),
        ("wind chill", "Cold/Wind Chill", "substring"),
    ])
    assert chill_first.match("WIND CHILL") == "Cold/Wind Chill"
    assert wind_first.match("WIND CHILL") == "High Wind"


def test_rule_kinds():
    rs = RuleSet.from_pairs([
        ("hail", "Hail", "exact"),
        ("snow", "Heavy Snow", "substring"),
        (r"^tstm\b", "Thunderstorm Wind", "regex"),
    ])
    assert rs.match("HAIL") == "Hail"
    assert rs.match("SMALL HAIL") is None
    assert rs.match("HEAVY SNOW SHOWERS") == "Heavy Snow"
    assert rs.match("TSTM WIND") == "Thunderstorm Wind"
    assert rs.match("MARINE TSTM WIND") is None


def test_non_canonical_category_is_rejected():
    with pytest.raises(RulesetError, match="not a canonical"):
        RuleSet.from_pairs([("rain", "Rainy Day")])


def test_invalid_regex_is_rejected():
    with pytest.raises(RulesetError, match="invalid regex"):
        RuleSet.from_pairs([("(unclosed", "Flood")])


def test_unknown_kind_is_rejected():
    with pytest.raises(RulesetError, match="unknown rule kind"):
        RuleSet.from_pairs([("flood", "Flood", "glob")])


def test_empty_ruleset_is_rejected():
    with pytest.raises(RulesetError):
        RuleSet([])


def test_load_rules_from_csv(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text(
        "# comment line\n"
        "pattern,category,kind\n"
        "tstm,Thunderstorm Wind,substring\n"
        "flood,Flood,regex\n"
    )
    rs = load_rules(path)
    assert len(rs) == 2
    assert rs.match("TSTM WIND/HAIL") == "Thunderstorm Wind"
    assert rs.source == str(path)


def test_load_rules_defaults_kind_to_regex(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text("pattern,category\n^flood$,Flood\n")
    rs = load_rules(path)
    assert rs.rules[0].kind == "regex"
    assert rs.match("FLOOD") == "Flood"
    assert rs.match("FLOODING") is None


def test_load_rules_missing_file(tmp_path):
    with pytest.raises(RulesetError, match="not found"):
        load_rules(tmp_path / "missing.csv")


def test_load_rules_missing_columns(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text("regex,label\nflood,Flood\n")
    with pytest.raises(RulesetError, match="missing column"):
        load_rules(path)


def test_load_rules_header_only(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text("pattern,category,kind\n")
    with pytest.raises(RulesetError):
        load_rules(path)


def test_regex_rules_ignore_case():
    rs = RuleSet.from_pairs([("^TSTM", "Thunderstorm Wind", "regex")])
    assert rs.match("tstm wind") == "Thunderstorm Wind"
    assert rs.match("TSTM WIND") == "Thunderstorm Wind"


def test_hash_inside_pattern_is_kept(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text(
        "pattern,category,kind\n"
        "# whole-line comment\n"
        "hail #2,Hail,exact\n"
    )
    rs = load_rules(path)
    assert rs.rules[0].pattern == "hail #2"
    assert rs.match("HAIL #2") == "Hail"
    assert rs.match("HAIL") is None


def test_ruleset_errors_report_file_line(tmp_path):
    path = tmp_path / "rules.csv"
    path.write_text(
        "# header comment\n"
        "# another comment\n"
        "pattern,category,kind\n"
        "flood,Flood,regex\n"
        "\n"
        "# bad rule follows\n"
        "rain,Drizzle,regex\n"
    )
    with pytest.raises(RulesetError, match="line 7:"):
        load_rules(path)
