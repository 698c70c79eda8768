"""
Display labels for train operators.

Keys are normalized column identifiers as produced by
`delaycomp.transforms.columns.normalize_name`; footnote suffixes such as
"_note_1" are part of the identifier because they come from the workbook
headers.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional


OPERATOR_LABELS: Dict[str, str] = {
    "great_britain": "Great Britain",
    "avanti_west_coast": "Avanti WC",
    "great_western_railway": "GWR",
    "govia_thameslink_railway": "GTR",
    "south_western_railway": "SWR",
    "london_north_eastern_railway": "LNER",
    "southeastern": "Southeastern",
    "west_midlands_trains": "West Midlands",
    "greater_anglia": "Greater Anglia",
    "northern_trains": "Northern",
    "east_midlands_railway": "East Midlands",
    "trans_pennine_express": "TPE",
    "cross_country": "CrossCountry",
    "tfw_rail": "TfW Rail",
    "scotrail": "ScotRail",
    "chiltern_railways": "Chiltern",
    "c2c": "c2c",
    "lumo_note_2": "Lumo",
    "hull_trains_note_1": "Hull Trains",
    "grand_central_note_1": "Grand Central",
    "heathrow_express": "Heathrow Ex.",
    "london_overground_note_5": "London Overground",
    "elizabeth_line_note_3_note5": "Elizabeth Line",
    "caledonian_sleeper_note_1": "Caledonian Sleeper",
    "merseyrail": "Merseyrail",
}


def label_for(operator: str, labels: Optional[Mapping[str, str]] = None) -> str:
    """Display label of an operator; unknown identifiers are returned unchanged."""
    labels = OPERATOR_LABELS if labels is None else labels
    return labels.get(operator, operator)


def unlabelled(operators: Iterable[str], labels: Optional[Mapping[str, str]] = None) -> List[str]:
    """Operators (in first-seen order) that fall back to their raw identifier."""
    labels = OPERATOR_LABELS if labels is None else labels
    out: List[str] = []
    for op in operators:
        if op not in labels and op not in out:
            out.append(op)
    return out
