from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import ValidationError

from changefeed.app.schemas.containers import ContainerProperties


def test_partition_key_accepts_single_path():
    properties = ContainerProperties(id="MyCollection", partition_key="/country")

    assert properties.partition_key.paths == ["/country"]
    assert properties.partition_key.kind == "Hash"
    assert properties.partition_key_path == "/country"


@pytest.mark.parametrize("path", ["country", "/", "  "])
def test_partition_key_path_must_name_a_property(path):
    with pytest.raises(ValidationError):
        ContainerProperties(id="c", partition_key=path)


@pytest.mark.parametrize("ttl", [0, -2])
def test_default_ttl_rejects_zero_and_other_negatives(ttl):
    with pytest.raises(ValidationError):
        ContainerProperties(id="c", partition_key="/pk", default_time_to_live=ttl)


def test_change_feed_retention_set_through_container():
    properties = ContainerProperties(id="MyCollection", partition_key="/country")

    properties.change_feed_policy.retention_duration = timedelta(minutes=5)

    assert properties.change_feed_retention == timedelta(minutes=5)
    assert properties.to_wire() == {
        "id": "MyCollection",
        "partitionKey": {"paths": ["/country"], "kind": "Hash"},
        "changeFeedPolicy": {"logRetentionDuration": 5},
    }


def test_wire_form_omits_unset_optional_fields():
    properties = ContainerProperties(id="c", partition_key="/pk")

    document = properties.to_wire()

    assert "defaultTtl" not in document
    assert document["changeFeedPolicy"] == {}


def test_parses_service_document_and_ignores_system_fields():
    properties = ContainerProperties.model_validate(
        {
            "id": "orders",
            "partitionKey": {"paths": ["/tenant"], "kind": "Hash"},
            "defaultTtl": -1,
            "changeFeedPolicy": {"logRetentionDuration": 1440},
            "_rid": "abc==",
            "_etag": '"0000"',
        }
    )

    assert properties.default_time_to_live == -1
    assert properties.change_feed_retention == timedelta(days=1)


def test_missing_change_feed_policy_reads_zero():
    properties = ContainerProperties.model_validate({"id": "c", "partitionKey": {"paths": ["/pk"]}})

    assert properties.change_feed_retention == timedelta(0)
    assert properties.change_feed_policy.is_configured is False
