"""
Tests for OperationRequest construction and immutability.
"""
from __future__ import annotations

import dataclasses

import pytest

from platform_ops.api.models import AttachPostgresClusterInput
from platform_ops.api.request import OperationKind, OperationRequest

DOC = "query($appName: String!) { app(name: $appName) { name } }"


class TestOperationRequest:
    """Test request building."""

    def test_query_and_mutation_constructors(self):
        assert OperationRequest.query("app", DOC).kind is OperationKind.QUERY
        assert OperationRequest.mutation("app", DOC).kind is OperationKind.MUTATION

    def test_with_var_returns_new_request(self):
        base = OperationRequest.query("app", DOC)
        bound = base.with_var("appName", "web")

        assert dict(bound.variables) == {"appName": "web"}
        assert dict(base.variables) == {}

    def test_duplicate_variable_rejected(self):
        req = OperationRequest.query("app", DOC).with_var("appName", "web")

        with pytest.raises(ValueError, match="already bound"):
            req.with_var("appName", "api")

    def test_variables_are_read_only(self):
        req = OperationRequest.query("app", DOC).with_var("appName", "web")

        with pytest.raises(TypeError):
            req.variables["appName"] = "api"

    def test_request_is_frozen(self):
        req = OperationRequest.query("app", DOC)

        with pytest.raises(dataclasses.FrozenInstanceError):
            req.document = "query { other }"

    def test_bound_containers_are_copied(self):
        value = {"name": "pg", "tags": ["a"]}
        req = OperationRequest.mutation("create", DOC).with_var("input", value)

        value["name"] = "changed"
        value["tags"].append("b")

        assert req.payload()["variables"]["input"] == {"name": "pg", "tags": ["a"]}

    def test_constructor_variables_are_copied(self):
        inner = {"name": "pg", "tags": ["a"]}
        req = OperationRequest(name="create", document=DOC, variables={"input": inner})

        inner["name"] = "changed"
        inner["tags"].append("b")

        assert req.payload()["variables"] == {"input": {"name": "pg", "tags": ["a"]}}

    def test_nested_values_are_read_only(self):
        req = OperationRequest.mutation("create", DOC).with_var("input", {"name": "pg", "tags": ["a"]})

        with pytest.raises(TypeError):
            req.variables["input"]["name"] = "changed"
        with pytest.raises(AttributeError):
            req.variables["input"]["tags"].append("b")

        assert req.payload()["variables"]["input"] == {"name": "pg", "tags": ["a"]}

    def test_payload_is_plain_json(self):
        req = OperationRequest.mutation("create", DOC).with_var("input", {"ports": [{"port": 80}]})

        body = req.payload()

        assert type(body["variables"]) is dict
        assert type(body["variables"]["input"]["ports"]) is list
        assert type(body["variables"]["input"]["ports"][0]) is dict
        body["variables"]["input"]["ports"].append({"port": 443})
        assert req.payload()["variables"]["input"]["ports"] == [{"port": 80}]

    def test_model_variables_use_aliases_and_drop_none(self):
        attach = AttachPostgresClusterInput(app_id="web", postgres_cluster_app_id="pg")
        req = OperationRequest.mutation("attach", DOC).with_var("input", attach)

        assert req.variables["input"] == {"appId": "web", "postgresClusterAppId": "pg"}

    def test_payload(self):
        req = OperationRequest.query("app", DOC).with_var("appName", "web")
        assert req.payload() == {"query": DOC, "variables": {"appName": "web"}}

    @pytest.mark.parametrize("name,document", [("", DOC), ("app", ""), ("app", "   ")])
    def test_name_and_document_required(self, name, document):
        with pytest.raises(ValueError):
            OperationRequest(name=name, document=document)
