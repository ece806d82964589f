from urllib.parse import parse_qsl, urlsplit

import pytest

from prompt_vault.discovery import to_csv_url, to_pubhtml_url

from .conftest import BASE_LINK, LISTING_URL


@pytest.mark.parametrize(
    "link, expected",
    [
        (BASE_LINK, LISTING_URL),
        (f"{BASE_LINK}&gid=123", LISTING_URL),
        (
            "https://docs.google.com/spreadsheets/d/e/KEY/pub?gid=5&single=true&output=csv",
            "https://docs.google.com/spreadsheets/d/e/KEY/pubhtml",
        ),
        (
            "https://docs.google.com/spreadsheets/d/e/KEY/pubhtml?gid=7",
            "https://docs.google.com/spreadsheets/d/e/KEY/pubhtml",
        ),
    ],
)
def test_to_pubhtml_url(link: str, expected: str):
    assert to_pubhtml_url(link) == expected


def test_to_csv_url_appends_gid():
    assert to_csv_url(BASE_LINK, "123") == f"{BASE_LINK}&gid=123"


def test_to_csv_url_replaces_existing_gids():
    url = to_csv_url(f"{BASE_LINK}&gid=1&gid=2", "9")
    params = parse_qsl(urlsplit(url).query)
    assert [value for key, value in params if key == "gid"] == ["9"]
    assert params[-1] == ("gid", "9")


@pytest.mark.parametrize(
    "link",
    [
        "https://docs.google.com/spreadsheets/d/e/KEY/pub",
        "https://docs.google.com/spreadsheets/d/e/KEY/pub?single=true",
        "https://docs.google.com/spreadsheets/d/e/KEY/pub?output=tsv",
        "https://docs.google.com/spreadsheets/d/e/KEY/pub?gid=0&output=csv",
    ],
)
def test_to_csv_url_always_marks_csv_output(link: str):
    params = parse_qsl(urlsplit(to_csv_url(link, "4")).query)
    assert ("output", "csv") in params
    assert [key for key, _ in params].count("output") == 1
    assert [value for key, value in params if key == "gid"] == ["4"]


def test_to_csv_url_keeps_other_parameters_in_place():
    link = "https://docs.google.com/spreadsheets/d/e/KEY/pub?single=true&output=csv"
    assert (
        to_csv_url(link, "3")
        == "https://docs.google.com/spreadsheets/d/e/KEY/pub?single=true&output=csv&gid=3"
    )
