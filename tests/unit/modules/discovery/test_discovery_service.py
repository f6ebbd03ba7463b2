import pytest

from cloudtag_exporter.modules.discovery.domain.models import Job, Tag
from cloudtag_exporter.modules.discovery.domain.service import TagDiscoveryService
from cloudtag_exporter.shared.core.exceptions import ConfigurationError
from cloudtag_exporter.shared.core.ops_metrics import PrometheusCallCounter


@pytest.mark.asyncio
async def test_discover_dispatches_special_types(
    paginator_factory, make_clients, recording_counter
) -> None:
    asg = paginator_factory(
        [{"AutoScalingGroups": [{
            "AutoScalingGroupARN": "arn:aws:autoscaling:eu-west-1:123456789012:autoScalingGroup:u:autoScalingGroupName/web",
            "Tags": [{"Key": "env", "Value": "prod"}],
        }]}]
    )
    tgwa = paginator_factory(
        [{"TransitGatewayAttachments": [{
            "TransitGatewayId": "tgw-1",
            "TransitGatewayAttachmentId": "tgw-attach-2",
            "Tags": [],
        }]}]
    )
    clients = make_clients(
        autoscaling={"describe_auto_scaling_groups": asg},
        ec2={"describe_transit_gateway_attachments": tgwa},
    )
    service = TagDiscoveryService(clients, counter=recording_counter)

    groups = await service.discover(Job("asg", (Tag("env", "prod"),)), "eu-west-1")
    attachments = await service.discover(Job("tgwa"), "eu-west-1")

    assert [r.id for r in groups] == [
        "arn:aws:autoscaling:eu-west-1:123456789012:autoScalingGroupName/web"
    ]
    assert [r.id for r in attachments] == ["tgw-1/tgw-attach-2"]
    assert recording_counter.calls == ["autoscaling", "ec2"]


@pytest.mark.asyncio
async def test_discover_uses_tagging_api_for_registry_types(
    paginator_factory, make_clients, recording_counter
) -> None:
    tagging = paginator_factory(
        [{"ResourceTagMappingList": [{"ResourceARN": "arn:aws:dynamodb:us-east-1:123456789012:table/t", "Tags": []}]}]
    )
    service = TagDiscoveryService(
        make_clients(tagging={"get_resources": tagging}), counter=recording_counter
    )

    resources = await service.discover(Job("dynamodb"), "us-east-1")

    assert [(r.id, r.service, r.region) for r in resources] == [
        ("arn:aws:dynamodb:us-east-1:123456789012:table/t", "dynamodb", "us-east-1")
    ]
    assert tagging.calls == [{"ResourceTypeFilters": ["dynamodb:table"]}]


@pytest.mark.asyncio
async def test_discover_unsupported_type_fails_before_any_call(
    make_clients, recording_counter
) -> None:
    service = TagDiscoveryService(make_clients(), counter=recording_counter)

    with pytest.raises(ConfigurationError):
        await service.discover(Job("not-a-type"), "us-east-1")

    assert recording_counter.calls == []


def test_default_counter_is_prometheus_backed(make_clients) -> None:
    service = TagDiscoveryService(make_clients())
    assert isinstance(service.counter, PrometheusCallCounter)
