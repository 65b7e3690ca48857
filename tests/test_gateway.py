"""Tests for the submission gateway against the real admin endpoint."""
import httpx
import pytest

from options_manager.models.option import Option
from options_manager.services import option_service
from options_manager.services.option_transform import is_temporary_id
from options_manager.state.gateway import PendingMutation, SubmissionGateway
from options_manager.state.store import OptionStore

from tests.conftest import SHOP


@pytest.fixture
def http(app, db):
    with httpx.Client(
        transport=httpx.WSGITransport(app=app),
        base_url="http://testserver",
        headers={"X-Shopify-Shop-Domain": SHOP},
    ) as client:
        yield client


def _seeded_store():
    return OptionStore([o.to_dict() for o in option_service.list_options(SHOP)])


def _mock_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://testserver")


def test_add_option_reconciles_temporary_id(http):
    store = OptionStore([])
    gateway = SubmissionGateway(store, http)

    result = gateway.add_option("Color", ["Red", "Blue"], "color")

    assert result["success"] is True
    assert len(store.options) == 1
    local = store.options[0]
    assert local["id"] == result["option"]["id"]
    assert not is_temporary_id(local["id"])
    assert [(v["name"], v["checked"]) for v in local["values"]] == [("Red", True), ("Blue", True)]
    assert gateway.toast.message == 'Option "Color" created successfully!'
    assert not gateway.loading
    assert Option.query.filter_by(shop=SHOP).count() == 1


def test_add_option_failure_reverts(http):
    option_service.create_option(SHOP, {"name": "Color", "values": ["Red"]})
    store = _seeded_store()
    gateway = SubmissionGateway(store, http)
    before = store.options

    result = gateway.add_option("Color", ["Blue"], "color")

    assert result["success"] is False
    assert store.options == before
    assert gateway.toast.message.startswith("Failed to create option:")
    assert "unique" in gateway.toast.message


def test_edit_option_keeps_local_checked_state(http):
    option = option_service.create_option(SHOP, {"name": "Color", "values": ["Red", "Blue"]})
    store = _seeded_store()
    gateway = SubmissionGateway(store, http)
    store.toggle_value_checked(option.id, "Red")

    result = gateway.edit_option(option.id, "Color", ["Red", "Green"], "text")

    assert result["success"] is True
    values = store.get(option.id)["values"]
    assert [(v["name"], v["checked"]) for v in values] == [("Red", False), ("Green", True)]
    assert [v.value for v in option_service.get_option(option.id).values] == ["Red", "Green"]


def test_edit_option_failure_restores_snapshot(http):
    option = option_service.create_option(SHOP, {"name": "Color", "type": "color", "values": ["Red"]})
    store = _seeded_store()
    gateway = SubmissionGateway(store, http)
    before = store.get(option.id)

    result = gateway.edit_option(option.id, "Color", ["Red", "Blue"], "text")

    assert result["success"] is False
    assert store.get(option.id) == before
    assert "cannot be changed" in gateway.toast.message


def test_edit_unknown_option(http):
    gateway = SubmissionGateway(OptionStore([]), http)
    assert gateway.edit_option("missing", "X", [], "text") is None
    assert gateway.toast.message == "Option not found."


def test_delete_options(http):
    ids = [
        option_service.create_option(SHOP, {"name": name, "values": []}).id
        for name in ("A", "B", "C")
    ]
    store = _seeded_store()
    gateway = SubmissionGateway(store, http)

    result = gateway.delete_options([ids[0], ids[2]])

    assert result["count"] == 2
    assert store.ids == [ids[1]]
    assert gateway.toast.message.startswith("Successfully deleted 2 options")
    assert [o.id for o in option_service.list_options(SHOP)] == [ids[1]]


def test_delete_failure_reinserts_at_original_index():
    loaded = [
        {"id": option_id, "name": option_id.upper(), "values": []}
        for option_id in ("a", "b", "c", "d")
    ]
    store = OptionStore(loaded)

    def handler(request):
        return httpx.Response(500, json={"success": False, "error": "boom"})

    gateway = SubmissionGateway(store, _mock_client(handler))
    result = gateway.delete_options(["b", "d"])

    assert result == {"success": False, "error": "boom"}
    assert store.ids == ["a", "b", "c", "d"]
    assert gateway.toast.message == "Failed to delete options: boom"


def test_network_error_reverts_add():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    store = OptionStore([])
    gateway = SubmissionGateway(store, _mock_client(handler))

    result = gateway.add_option("Size", ["S"], "text")

    assert result["success"] is False
    assert "Network error" in result["error"]
    assert store.options == []


def test_non_json_response_is_a_failure():
    def handler(request):
        return httpx.Response(502, text="<html>Bad gateway</html>")

    store = OptionStore([{"id": "a", "name": "A", "values": []}])
    gateway = SubmissionGateway(store, _mock_client(handler))

    result = gateway.delete_options("a")

    assert result["success"] is False
    assert "502" in result["error"]
    assert store.ids == ["a"]


def test_success_without_option_record_reverts():
    def handler(request):
        return httpx.Response(200, json={"success": True})

    store = OptionStore([{"id": "a", "name": "Color", "values": [{"value": "Red"}]}])
    gateway = SubmissionGateway(store, _mock_client(handler))
    before = store.options

    result = gateway.add_option("Size", ["S"], "text")
    assert result["success"] is False
    assert store.options == before
    assert gateway.toast.message.startswith("Failed to create option:")

    result = gateway.edit_option("a", "Colour", ["Red", "Blue"], "text")
    assert result["success"] is False
    assert store.options == before
    assert gateway.toast.message.startswith("Failed to update option:")
    assert not gateway.loading


def test_request_payload_shape():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"success": False, "error": "nope"})

    gateway = SubmissionGateway(OptionStore([]), _mock_client(handler))
    gateway.add_option("Size", ["S", "M"], "text")

    body = seen[0].content.decode()
    assert seen[0].method == "POST"
    assert seen[0].url.path == "/app/"
    assert "actionType=Add+Option" in body
    assert "optionSet=" in body


def test_refuses_while_loading():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"success": True})

    store = OptionStore([])
    gateway = SubmissionGateway(store, _mock_client(handler))
    gateway.pending["in-flight"] = PendingMutation("Add Option")

    assert gateway.loading
    assert gateway.add_option("Size", ["S"], "text") is None
    assert store.options == []
    assert calls == []


def test_apply_options_requires_products(http):
    gateway = SubmissionGateway(OptionStore([]), http)
    assert gateway.apply_options([]) is None
    assert gateway.toast.message == "Please select at least one product to apply options to."


def test_apply_options(http):
    option_service.create_option(SHOP, {"name": "Size", "values": ["S"]})
    gateway = SubmissionGateway(_seeded_store(), http)

    result = gateway.apply_options(["linen-shirt"])

    assert result["success"] is True
    assert result["queued"] is False
    assert "1 product(s)" in gateway.toast.message
