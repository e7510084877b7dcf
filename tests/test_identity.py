import pytest

from har_openapi.capture.base import Request, Response, Sample
from har_openapi.errors import MalformedURLError, MissingObjectNameError, UnsupportedMethodError
from har_openapi.inference.identity import PathParameter, analyze_samples, classify_request

BASE = "https://app.example.com/api"


def _make_sample(url: str, method: str = "GET") -> Sample:
    return Sample(request=Request(url=url, method=method), response=Response(data={}))


class TestPathTemplate:
    def test_numeric_segment_becomes_placeholder(self):
        info = classify_request(f"{BASE}/clients/42", "GET")
        assert info.path == "/clients/{id}"
        assert info.path_parameters == [PathParameter(name="id", param_type="integer")]

    def test_one_parameter_per_placeholder(self):
        info = classify_request(f"{BASE}/clients/42/invoices/7", "GET")
        assert info.path == "/clients/{id}/invoices/{id}"
        assert len(info.path_parameters) == 2

    def test_query_and_trailing_slash_ignored(self):
        info = classify_request(f"{BASE}/vendors/?page=1", "GET")
        assert info.path == "/vendors"

    def test_root_segments_configurable(self):
        info = classify_request("https://app.example.com/api/v2/orders", "GET", root_segments=3)
        assert info.path == "/orders"
        assert info.operation_id == "getOrders"


class TestOperationNaming:
    def test_single_client(self):
        info = classify_request(f"{BASE}/clients/42", "GET")
        assert info.operation_id == "getClient"
        assert info.object_name == "Client"
        assert info.response_object_name == "GetClientResponse"

    def test_segment_before_id_always_singularized(self):
        info = classify_request(f"{BASE}/status/5", "GET")
        assert info.operation_id == "getStatu"
        assert info.object_name == "Statu"

    def test_client_collection(self):
        info = classify_request(f"{BASE}/clients", "GET")
        assert info.operation_id == "getClients"
        assert info.object_name == "Client"
        assert info.response_object_name == "GetClientsResponse"

    def test_list_suffix_pluralizes(self):
        info = classify_request(f"{BASE}/employeelist", "GET")
        assert info.operation_id == "getEmployees"
        assert info.object_name == "Employee"
        assert info.response_object_name == "GetEmployeesResponse"

    def test_itemlist(self):
        info = classify_request(f"{BASE}/itemlist", "GET")
        assert info.operation_id == "getItems"
        assert info.object_name == "Item"

    def test_list_segment(self):
        info = classify_request(f"{BASE}/activities/list", "GET")
        assert info.operation_id == "getActivities"
        assert info.object_name == "Activity"
        assert info.response_object_name == "GetActivitiesResponse"

    def test_all_segment(self):
        info = classify_request(f"{BASE}/category/all", "GET")
        assert info.operation_id == "getCategories"
        assert info.object_name == "Category"

    def test_plural_prefix_before_list_is_literal(self):
        info = classify_request(f"{BASE}/itemslist", "GET")
        assert info.operation_id == "getItemslist"
        assert info.object_name == "Item"

    def test_last_literal_wins(self):
        info = classify_request(f"{BASE}/swtraining/freetrainings", "GET")
        assert info.operation_id == "getSwtrainingFreetrainings"
        assert info.object_name == "Freetraining"
        assert info.response_object_name == "GetSwtrainingFreetrainingsResponse"

    def test_method_seeds_operation_id(self):
        info = classify_request(f"{BASE}/login", "POST")
        assert info.operation_id == "postLogin"
        assert info.response_object_name == "PostLoginResponse"


class TestClassificationErrors:
    def test_missing_object_name(self):
        with pytest.raises(MissingObjectNameError):
            classify_request(f"{BASE}/42", "GET")

    def test_relative_url(self):
        with pytest.raises(MalformedURLError):
            classify_request("/api/clients", "GET")

    def test_unparseable_url(self):
        with pytest.raises(MalformedURLError):
            classify_request("http://[::1/api/clients", "GET")

    def test_unsupported_method(self):
        with pytest.raises(UnsupportedMethodError):
            classify_request(f"{BASE}/files", "PROPFIND")


class TestAnalyzeSamples:
    def test_skips_unusable_samples(self, caplog):
        samples = [
            _make_sample(f"{BASE}/clients/1"),
            _make_sample(f"{BASE}/7"),
            _make_sample("not a url"),
        ]
        exchanges = analyze_samples(samples)
        assert [e.info.operation_id for e in exchanges] == ["getClient"]
        assert "No object name found in path" in caplog.text
        assert "Cannot parse URL" in caplog.text
