"""Tests for catalog_* tools."""

import json

import httpx
import pytest

from locabriques_mcp_server.api_client import NO_RESPONSE_MESSAGE

from conftest import query_of, text_of


CATALOGS = {"sets": "https://locabriques.fr/api/catalogs/sets/"}
SETS_PAGE = {"count": 1, "next": None, "previous": None,
             "results": [{"lego_id": "10333-1", "name": "The Lord of the Rings: Barad-dûr"}]}


class TestCatalogList:

    @pytest.mark.asyncio
    async def test_success(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/", json=CATALOGS)

        result = await registry.call("catalog_list", {})

        assert fake_api.calls() == [("GET", "https://locabriques.test/api/catalogs/")]
        assert result.isError is None
        assert json.loads(text_of(result)) == CATALOGS

    @pytest.mark.asyncio
    async def test_failure(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/", error=httpx.ConnectError)

        result = await registry.call("catalog_list", {})

        assert result.isError is True
        assert text_of(result) == f"Could not fetch catalogs: {NO_RESPONSE_MESSAGE}"


class TestCatalogListSets:

    @pytest.mark.asyncio
    async def test_filters_are_passed_as_query(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/", json=SETS_PAGE)

        result = await registry.call("catalog_list_sets", {
            "page": 2,
            "min_price": 10,
            "max_rate": 4.5,
            "theme": "star-wars",
            "sort": "-_average_rate",
            "exclude_not_available": True,
        })

        assert len(fake_api.requests) == 1
        assert fake_api.last.method == "GET"
        assert query_of(fake_api.last) == {
            "page": "2",
            "min_price": "10",
            "max_rate": "4.5",
            "theme": "star-wars",
            "sort": "-_average_rate",
            "exclude_not_available": "true",
        }
        assert json.loads(text_of(result)) == SETS_PAGE

    @pytest.mark.asyncio
    async def test_no_filters_sends_empty_query(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/", json=SETS_PAGE)

        await registry.call("catalog_list_sets", {})

        assert fake_api.last.url.query == b""

    @pytest.mark.asyncio
    async def test_sorting_types_are_repeated(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/", json=SETS_PAGE)

        await registry.call("catalog_list_sets", {"sorting_type": ["BAG_NUMBER", "COLOR"]})

        assert query_of(fake_api.last) == {"sorting_type": ["BAG_NUMBER", "COLOR"]}

    @pytest.mark.asyncio
    async def test_failure(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/", status=500, json={"message": "Server error"})

        result = await registry.call("catalog_list_sets", {"page": 1})

        assert result.isError is True
        assert text_of(result) == "Could not fetch catalog sets: LocaBriques API Error [500]: Server error"

    @pytest.mark.asyncio
    async def test_idempotent(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/", json=SETS_PAGE)

        first = await registry.call("catalog_list_sets", {"searched_string": "castle"})
        second = await registry.call("catalog_list_sets", {"searched_string": "castle"})

        assert first.to_envelope() == second.to_envelope()


class TestCatalogRetrieveSet:

    @pytest.mark.asyncio
    async def test_success(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/10333-1/", json=SETS_PAGE["results"][0])

        result = await registry.call("catalog_retrieve_set", {"lego_id": "10333-1"})

        assert fake_api.last.url.path == "/api/catalogs/sets/10333-1/"
        assert json.loads(text_of(result)) == SETS_PAGE["results"][0]

    @pytest.mark.asyncio
    async def test_not_found(self, registry, fake_api):
        fake_api.add("GET", "/api/catalogs/sets/99999-1/", status=404, json={"message": "Not found"})

        result = await registry.call("catalog_retrieve_set", {"lego_id": "99999-1"})

        assert result.isError is True
        assert text_of(result) == "Could not fetch catalog set '99999-1': LocaBriques API Error [404]: Not found"
