"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field

import httpx
import pytest

from usda_ndb.adapters.ndb_client import HttpxNdbClient
from usda_ndb.config import Settings


@dataclass
class RecordingHandler:
    """MockTransport handler that records requests and replays a JSON body."""

    payload: object = field(default_factory=dict)
    status_code: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def settings() -> Settings:
    return Settings(ndb_api_key="demo123")


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()


@pytest.fixture
def make_client() -> Callable[..., HttpxNdbClient]:
    def factory(handler: Callable, api_key: str = "demo123") -> HttpxNdbClient:
        transport = httpx.MockTransport(handler)
        return HttpxNdbClient.create(
            api_key, http_client=httpx.AsyncClient(transport=transport)
        )

    return factory


@pytest.fixture
def list_payload() -> dict[str, object]:
    return {
        "list": {
            "lt": "f",
            "start": 0,
            "end": 2,
            "total": 8790,
            "sr": "Legacy",
            "sort": "id",
            "item": [
                {"offset": 0, "id": "01001", "name": "Butter, salted"},
                {"offset": 1, "id": "01002", "name": "Butter, whipped, with salt"},
            ],
        }
    }


@pytest.fixture
def nutrient_report_payload() -> dict[str, object]:
    return {
        "report": {
            "sr": "Legacy",
            "groups": [{"id": "0300", "description": "Baby Foods"}],
            "subset": "All foods",
            "end": 1,
            "start": 0,
            "total": 361,
            "foods": [
                {
                    "ndbno": "03000",
                    "name": "Babyfood, water, bottled, GERBER, without added fluoride.",
                    "weight": 113.0,
                    "measure": "4.0 oz",
                    "nutrients": [
                        {
                            "nutrient_id": 306,
                            "nutrient": "Potassium, K",
                            "unit": "mg",
                            "value": "0",
                            "gm": 0.0,
                        },
                        {
                            "nutrient_id": 204,
                            "nutrient": "Total lipid (fat)",
                            "unit": "g",
                            "value": "--",
                            "gm": 0.5,
                        },
                    ],
                }
            ],
        }
    }


@pytest.fixture
def foods_report_payload() -> dict[str, object]:
    return {
        "foods": [
            {
                "food": {
                    "sr": "Legacy",
                    "type": "b",
                    "desc": {
                        "ndbno": "01009",
                        "name": "Cheese, cheddar",
                        "sd": "CHEESE,CHEDDAR",
                        "fg": "Dairy and Egg Products",
                        "sn": "",
                        "cn": "",
                        "manu": "",
                        "nf": 6.38,
                        "cf": 3.87,
                        "ff": 8.79,
                        "pf": 4.27,
                        "r": "",
                        "rd": "",
                        "ds": "Standard Reference",
                        "ru": "g",
                    },
                    "nutrients": [
                        {
                            "nutrient_id": "255",
                            "name": "Water",
                            "derivation": "NONE",
                            "group": "Proximates",
                            "unit": "g",
                            "value": 37.02,
                            "sourcecode": [1],
                            "dp": 6,
                            "se": "0.211",
                            "measures": [
                                {
                                    "label": "cup, diced",
                                    "eqv": 132.0,
                                    "eunit": "g",
                                    "qty": 1.0,
                                    "value": "48.87",
                                }
                            ],
                        },
                        {
                            "nutrient_id": 208,
                            "name": "Energy",
                            "derivation": "NC",
                            "group": "Proximates",
                            "unit": "kcal",
                            "value": "404",
                            "sourcecode": "",
                            "dp": None,
                            "se": "",
                            "measures": [],
                        },
                    ],
                    "sources": [
                        {
                            "id": 1,
                            "title": "Composition of Foods",
                            "authors": "USDA",
                            "vol": "8-1",
                            "iss": "",
                            "year": "1976",
                        }
                    ],
                    "footnotes": [],
                    "langual": [{"code": "A0001", "desc": "CHEESE"}],
                }
            },
            {"error": "No data for ndbno 99999"},
        ],
        "count": 2,
        "notfound": 1,
        "api": 2.0,
    }


@pytest.fixture
def search_payload() -> dict[str, object]:
    return {
        "list": {
            "q": "apple",
            "sr": "Legacy",
            "ds": "any",
            "start": 0,
            "end": 1,
            "total": 1,
            "group": "",
            "sort": "n",
            "item": [
                {
                    "offset": 0,
                    "group": "Fruits and Fruit Juices",
                    "name": "Apples, raw, with skin",
                    "ndbno": "09003",
                    "ds": "SR",
                    "manu": "none",
                }
            ],
        }
    }
