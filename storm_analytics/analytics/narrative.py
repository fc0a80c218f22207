"""
Narrative conclusion — plain-language findings built from rankings and totals.
"""
from __future__ import annotations

from storm_analytics.analytics.common import format_dollars, pct_of_total
from storm_analytics.data.schemas import ExclusionReport, Metric, RankingEntry


def _share(entries: list[RankingEntry], total: float) -> float:
    return pct_of_total(sum(e.value for e in entries), total)


def narrative_conclusion(
    rankings: dict[Metric, list[RankingEntry]],
    totals: dict,
    exclusions: ExclusionReport | None = None,
) -> list[dict]:
    """Findings as [{severity, title, detail}] blocks, most important first."""
    findings = []

    fatal = rankings.get(Metric.FATALITIES, [])
    injured = rankings.get(Metric.INJURIES, [])
    damage = rankings.get(Metric.DAMAGE, [])

    if not (fatal or injured or damage):
        return [{
            "severity": "info",
            "title": "NO USABLE RECORDS",
            "detail": "No records survived event-type and damage-unit cleaning, so no conclusion can be drawn.",
        }]

    # Population health
    if fatal and injured:
        lead_f, lead_i = fatal[0], injured[0]
        if lead_f.category == lead_i.category:
            detail = (f"{lead_f.category} is the most harmful event type to population health, "
                      f"leading both fatalities ({lead_f.value:,.0f}, "
                      f"{pct_of_total(lead_f.value, totals['total_fatalities']):.1f}% of all) and injuries "
                      f"({lead_i.value:,.0f}, {pct_of_total(lead_i.value, totals['total_injuries']):.1f}% of all).")
        else:
            detail = (f"{lead_f.category} causes the most fatalities ({lead_f.value:,.0f}) while "
                      f"{lead_i.category} causes the most injuries ({lead_i.value:,.0f}).")
        findings.append({"severity": "red", "title": "MOST HARMFUL TO POPULATION HEALTH", "detail": detail})

    # Economic consequences
    if damage:
        lead_d = damage[0]
        detail = (f"{lead_d.category} has the greatest economic consequences with "
                  f"{format_dollars(lead_d.value)} in property damage "
                  f"({pct_of_total(lead_d.value, totals['total_damage']):.1f}% of all recorded damage).")
        if len(damage) > 1:
            detail += f" {damage[1].category} follows with {format_dollars(damage[1].value)}."
        findings.append({"severity": "yellow", "title": "GREATEST ECONOMIC CONSEQUENCES", "detail": detail})

    # Concentration
    if fatal and damage:
        findings.append({
            "severity": "info",
            "title": "IMPACT IS CONCENTRATED",
            "detail": (f"The top {len(fatal)} event types account for "
                       f"{_share(fatal, totals['total_fatalities']):.1f}% of fatalities; the top {len(damage)} "
                       f"account for {_share(damage, totals['total_damage']):.1f}% of property damage."),
        })

    if exclusions is not None and exclusions.excluded_rows:
        findings.append({
            "severity": "info",
            "title": "DATA COVERAGE",
            "detail": (f"{exclusions.kept_rows:,} of {exclusions.total_rows:,} records ({exclusions.pct_kept:.1f}%) "
                       f"were usable. {exclusions.unmatched_event_types:,} had an unrecognised event type and "
                       f"{exclusions.unmatched_damage_units:,} an unrecognised damage unit."),
        })

    return findings
