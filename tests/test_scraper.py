"""Tests for the scrape pipeline and CLI."""

import json
from pathlib import Path

import pytest
from httpx import RequestError

from arc_loot.config import Settings
from arc_loot.exceptions import FetchError
from arc_loot.fetcher import PageFetcher
from arc_loot.scraper import scrape_loot
from scripts import scrape_loot as cli

LOOT_PAGE = """
<html><body>
<h1>Loot</h1>
<table class="wikitable sortable">
  <tr><th>Name</th><th>Rarity</th><th>Recycles to</th><th>Sell price</th><th>Category</th></tr>
  <tr>
    <td><a href="/wiki/Metal_Parts" title="Metal Parts">Metal Parts</a></td>
    <td>Common</td>
    <td>Cannot be recycled</td>
    <td>75</td>
    <td>Basic Material</td>
  </tr>
  <tr>
    <td><a href="/wiki/Wires" title="Wires">Wires</a></td>
    <td>Uncommon</td>
    <td>-</td>
    <td>200</td>
    <td>Basic Material</td>
  </tr>
  <tr>
    <td><a href="/wiki/Broken_Radio" title="Broken Radio">Broken Radio</a></td>
    <td>Rare</td>
    <td><a href="/wiki/Metal_Parts">2x Metal Parts</a><a href="/wiki/Wires">1x Wires</a></td>
    <td>1,250</td>
    <td>Recyclable</td>
  </tr>
</table>
</body></html>
"""

EXPECTED_ITEMS = [
    {
        "name": "Metal Parts",
        "link": "/wiki/Metal_Parts",
        "rarity": "Common",
        "recyclesToText": "Cannot be recycled",
        "recyclesToItems": [],
        "sellPrice": 75,
        "recycledSellPrice": 0,
        "category": "Basic Material",
    },
    {
        "name": "Wires",
        "link": "/wiki/Wires",
        "rarity": "Uncommon",
        "recyclesToText": "-",
        "recyclesToItems": [],
        "sellPrice": 200,
        "recycledSellPrice": 0,
        "category": "Basic Material",
    },
    {
        "name": "Broken Radio",
        "link": "/wiki/Broken_Radio",
        "rarity": "Rare",
        "recyclesToText": "2x Metal Parts, 1x Wires",
        "recyclesToItems": [
            {"quantity": 2, "name": "Metal Parts"},
            {"quantity": 1, "name": "Wires"},
        ],
        "sellPrice": 1250,
        "recycledSellPrice": 350,
        "category": "Recyclable",
    },
]


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        _env_file=None,
        cache_dir=tmp_path / "cache",
        output_path=tmp_path / "data" / "loot-data.json",
        request_delay=0.0,
    )


def _serve(mocker, pages: dict[str, str]):
    def fake_get(url, **kwargs):
        if url not in pages:
            raise RequestError(f"no route to {url}")
        response = mocker.Mock()
        response.text = pages[url]
        response.raise_for_status = lambda: None
        return response

    return mocker.patch("httpx.get", side_effect=fake_get)


def test_scrape_loot_computes_recycled_values(mocker, settings: Settings):
    _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": LOOT_PAGE})

    result = scrape_loot(PageFetcher(settings), settings.loot_path, request_delay=0.0)

    assert result.strategy == "table"
    assert [item.recycled_sell_price for item in result.items] == [0, 0, 350]
    assert result.detail_fetches == 0


def test_scrape_loot_fetches_missing_component_price(mocker, settings: Settings):
    page = LOOT_PAGE.replace("<td>200</td>", "<td>?</td>")
    mock_get = _serve(
        mocker,
        {
            "https://arcraiders.wiki/wiki/Loot": page,
            "https://arcraiders.wiki/wiki/Wires": "<p>Sell Price: 180</p>",
        },
    )

    result = scrape_loot(PageFetcher(settings), settings.loot_path, request_delay=0.0)

    assert result.items[1].sell_price is None
    assert result.items[2].recycled_sell_price == 330
    assert result.detail_fetches == 1
    assert mock_get.call_count == 2


def test_scrape_loot_without_detail_fetch(mocker, settings: Settings):
    page = LOOT_PAGE.replace("<td>200</td>", "<td>?</td>")
    mock_get = _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": page})

    result = scrape_loot(
        PageFetcher(settings), settings.loot_path, fetch_missing_prices=False
    )

    assert result.items[2].recycled_sell_price is None
    assert mock_get.call_count == 1


def test_scrape_loot_detail_failure_is_not_fatal(mocker, settings: Settings):
    page = LOOT_PAGE.replace("<td>200</td>", "<td>?</td>")
    _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": page})

    result = scrape_loot(PageFetcher(settings), settings.loot_path, request_delay=0.0)

    assert len(result.items) == 3
    assert result.items[2].recycled_sell_price is None


def test_scrape_loot_page_failure_propagates(mocker, settings: Settings):
    _serve(mocker, {})

    with pytest.raises(FetchError):
        scrape_loot(PageFetcher(settings), settings.loot_path)


def test_cli_writes_expected_document(mocker, settings: Settings):
    _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": LOOT_PAGE})
    mocker.patch.object(cli, "get_settings", return_value=settings)

    exit_code = cli.main([])

    assert exit_code == 0
    doc = json.loads(settings.output_path.read_text())
    assert doc["items"] == EXPECTED_ITEMS
    assert doc["lastUpdated"]


def test_cli_output_override(mocker, settings: Settings, tmp_path: Path):
    _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": LOOT_PAGE})
    mocker.patch.object(cli, "get_settings", return_value=settings)
    output = tmp_path / "elsewhere" / "out.json"

    assert cli.main(["--output", str(output)]) == 0
    assert len(json.loads(output.read_text())["items"]) == 3


def test_cli_dry_run_does_not_write(mocker, settings: Settings, capsys):
    _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": LOOT_PAGE})
    mocker.patch.object(cli, "get_settings", return_value=settings)

    assert cli.main(["--dry-run"]) == 0
    assert not settings.output_path.exists()
    assert '"recycledSellPrice": 350' in capsys.readouterr().out


def test_cli_fails_when_loot_page_unavailable(mocker, settings: Settings, capsys):
    _serve(mocker, {})
    mocker.patch.object(cli, "get_settings", return_value=settings)

    assert cli.main([]) == 1
    assert not settings.output_path.exists()
    assert "Could not fetch the loot page" in capsys.readouterr().err


def test_cli_empty_page_writes_empty_document(mocker, settings: Settings):
    _serve(mocker, {"https://arcraiders.wiki/wiki/Loot": "<html><body>Maintenance</body></html>"})
    mocker.patch.object(cli, "get_settings", return_value=settings)

    assert cli.main([]) == 0
    assert json.loads(settings.output_path.read_text())["items"] == []


def test_cli_clear_cache(mocker, settings: Settings, capsys):
    mocker.patch.object(cli, "get_settings", return_value=settings)

    assert cli.main(["--clear-cache"]) == 0
    assert "Cache cleared" in capsys.readouterr().out
