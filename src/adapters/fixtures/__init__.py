from adapters.fixtures.loader import load_default_test_data, load_test_data
from adapters.fixtures.models import ApiTestData, BoundaryCase, MalformedRequestCase, TestDataFile

__all__ = [
    "ApiTestData",
    "BoundaryCase",
    "MalformedRequestCase",
    "TestDataFile",
    "load_default_test_data",
    "load_test_data",
]
