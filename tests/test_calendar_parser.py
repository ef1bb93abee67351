"""
Tests for the Spectre Fleet calendar parser

Covers the happy path against a saved copy of the schedule page and the
all-or-nothing failure contract when a row drifts from the expected layout.
"""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from exceptions import ExtractionError
from fleets.models import FleetType
from render.motd import render_motd
from vendors.adapters.parsers.calendar_parser import parse_calendar

FIXTURE = Path(__file__).parent / "fixtures" / "spectre_calendar.html"
BASE_URL = "https://www.spectre-fleet.space"


def row(
    fc="An FC",
    link='<a href="/d/abc">A Fleet</a>',
    formup="Jita",
    start="May 01, 2022 19:30",
    marker='<span class="dot-HS"></span>',
):
    return (
        "<tr><td></td><td>Group</td>"
        f"<td>{fc}</td><td>Ships</td><td>{link}</td>"
        f"<td>{formup}</td><td>{start}</td><td>{marker}</td></tr>"
    )


def calendar(*rows):
    return (
        '<html><body><table class="table calendar-table"><tbody>'
        + "".join(rows)
        + "</tbody></table></body></html>"
    )


class TestFixtureDocument:
    """Saved schedule page with two known fleets"""

    @pytest.fixture
    def fleets(self):
        return parse_calendar(FIXTURE.read_text(encoding="utf-8"), base_url=BASE_URL)

    def test_returns_both_rows_in_page_order(self, fleets):
        assert [f.name for f in fleets] == ["BVL Flying Circus - Panzerliede!", "Golden Hunters"]

    def test_first_row(self, fleets):
        fleet = fleets[0]
        assert fleet.name == "BVL Flying Circus - Panzerliede!"
        assert fleet.fc == "Larkness"
        assert fleet.formup == "Amamake"
        assert fleet.url == "https://www.spectre-fleet.space/d/PQ7w"
        assert fleet.start == datetime(2022, 4, 18, 12, 0, tzinfo=timezone.utc)
        assert fleet.fleet_type == FleetType.LS

    def test_second_row(self, fleets):
        fleet = fleets[1]
        assert fleet.name == "Golden Hunters"
        assert fleet.fc == "Arwen Estalia"
        assert fleet.url == "https://www.spectre-fleet.space/d/AYIyg"
        assert fleet.start == datetime(2022, 4, 18, 18, 0, tzinfo=timezone.utc)
        assert fleet.fleet_type == FleetType.NS

    def test_header_row_is_not_a_fleet(self, fleets):
        assert len(fleets) == 2


class TestEmptyCalendar:
    def test_table_without_rows_is_empty_list(self):
        assert parse_calendar(calendar()) == []

    def test_page_without_table_is_empty_list(self):
        assert parse_calendar("<html><body><p>No fleets</p></body></html>") == []

    def test_empty_string_is_empty_list(self):
        assert parse_calendar("") == []


class TestTableWithoutBody:
    """Rows written directly under <table> are still fleets"""

    def test_rows_without_tbody(self):
        html = '<table class="calendar-table">' + row() + row(fc="Other FC") + "</table>"
        fleets = parse_calendar(html)
        assert [f.fc for f in fleets] == ["An FC", "Other FC"]

    def test_bad_row_without_tbody_fails(self):
        html = '<table class="calendar-table">' + row(start="soon") + "</table>"
        with pytest.raises(ExtractionError):
            parse_calendar(html)

    def test_header_rows_outside_body_ignored(self):
        html = (
            '<table class="calendar-table"><thead><tr><th>FC</th></tr></thead>'
            "<tbody>" + row() + "</tbody></table>"
        )
        assert len(parse_calendar(html)) == 1


class TestFieldExtraction:
    def test_url_uses_given_base(self):
        fleets = parse_calendar(calendar(row()), base_url="http://localhost:8080")
        assert fleets[0].url == "http://localhost:8080/d/abc"

    def test_default_base_url(self):
        fleets = parse_calendar(calendar(row()))
        assert fleets[0].url == "https://www.spectre-fleet.space/d/abc"

    def test_empty_fc_is_kept_empty(self):
        fleets = parse_calendar(calendar(row(fc="")))
        assert fleets[0].fc == ""

    def test_reserved_marker_kept_in_raw_name(self):
        fleets = parse_calendar(calendar(row(link='<a href="/d/x">GANKED 582 [RESERVED]</a>')))
        assert fleets[0].name == "GANKED 582 [RESERVED]"

    def test_name_is_trimmed(self):
        fleets = parse_calendar(calendar(row(link='<a href="/d/x">\n   Padded Fleet   \n</a>')))
        assert fleets[0].name == "Padded Fleet"

    def test_entities_kept_as_markup(self):
        fleets = parse_calendar(calendar(row(
            fc="Tom &amp; Jerry",
            link='<a href="/d/x">Fish &lt;3 Chips</a>',
            formup="Jita &gt; Perimeter",
        )))
        assert fleets[0].name == "Fish &lt;3 Chips"
        assert fleets[0].fc == "Tom &amp; Jerry"
        assert fleets[0].formup == "Jita &gt; Perimeter"

    def test_entities_survive_rendering(self):
        fleets = parse_calendar(calendar(row(link='<a href="/d/x">Fish &lt;3 Chips</a>')))
        motd = render_motd(fleets, datetime(2022, 4, 1, tzinfo=timezone.utc))
        assert '<a href="https://www.spectre-fleet.space/d/x">Fish &lt;3 Chips</a>' in motd

    @pytest.mark.parametrize("text,expected", [
        ("January 05, 2023 00:15", datetime(2023, 1, 5, 0, 15, tzinfo=timezone.utc)),
        ("September 30, 2022 23:59", datetime(2022, 9, 30, 23, 59, tzinfo=timezone.utc)),
    ])
    def test_english_month_names(self, text, expected):
        # Runs under the C locale; %B only knows English month names there
        fleets = parse_calendar(calendar(row(start=text)))
        assert fleets[0].start == expected

    def test_start_is_utc(self):
        fleets = parse_calendar(calendar(row(start="December 24, 2022 20:00")))
        assert fleets[0].start == datetime(2022, 12, 24, 20, 0, tzinfo=timezone.utc)
        assert fleets[0].start.utcoffset().total_seconds() == 0


class TestFleetTypeMarkers:
    @pytest.mark.parametrize("marker,expected", [
        ("dot-HS", FleetType.HS),
        ("dot-LS", FleetType.LS),
        ("dot-NS", FleetType.NS),
        ("dot-VNt", FleetType.EVENT),
        ("dot-COv", FleetType.COVOPS),
    ])
    def test_known_markers(self, marker, expected):
        fleets = parse_calendar(calendar(row(marker=f'<span class="{marker}"></span>')))
        assert fleets[0].fleet_type == expected

    @pytest.mark.parametrize("marker", ["dot-WH", "dot-GC", "dot-hs", "GATECAMP"])
    def test_unknown_marker_is_event(self, marker):
        fleets = parse_calendar(calendar(row(marker=f'<span class="{marker}"></span>')))
        assert fleets[0].fleet_type == FleetType.EVENT

    def test_marker_among_other_classes(self):
        fleets = parse_calendar(calendar(row(marker='<span class="dot dot-NS"></span>')))
        assert fleets[0].fleet_type == FleetType.NS


class TestStructuralFailures:
    """A single bad row fails the whole page"""

    def test_missing_link(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_calendar(calendar(row(), row(link="A Fleet")))
        assert exc_info.value.row == 1
        assert exc_info.value.message == "Failed to parse"

    def test_link_without_href(self):
        with pytest.raises(ExtractionError):
            parse_calendar(calendar(row(link="<a>A Fleet</a>")))

    def test_unparsable_start(self):
        with pytest.raises(ExtractionError) as exc_info:
            parse_calendar(calendar(row(start="2022-05-01 19:30")))
        assert isinstance(exc_info.value.original_error, ValueError)

    def test_missing_marker_span(self):
        with pytest.raises(ExtractionError):
            parse_calendar(calendar(row(marker="LS")))

    def test_marker_span_without_class(self):
        with pytest.raises(ExtractionError):
            parse_calendar(calendar(row(marker="<span></span>")))

    def test_short_row(self):
        with pytest.raises(ExtractionError):
            parse_calendar(calendar("<tr><td>only</td><td>two</td></tr>"))

    def test_bad_row_after_good_rows_still_fails(self):
        with pytest.raises(ExtractionError):
            parse_calendar(calendar(row(), row(), row(start="soon")))

    def test_non_text_input(self):
        with pytest.raises(ExtractionError):
            parse_calendar(b"<html></html>")
