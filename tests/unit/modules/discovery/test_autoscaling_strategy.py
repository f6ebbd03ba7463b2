import pytest

from cloudtag_exporter.modules.discovery.adapters.aws.autoscaling import AutoScalingGroupStrategy
from cloudtag_exporter.modules.discovery.domain.models import Job, Tag
from cloudtag_exporter.shared.core.exceptions import DiscoveryError


def _group(name: str, **tags: str) -> dict:
    return {
        "AutoScalingGroupName": name,
        "AutoScalingGroupARN": (
            "arn:aws:autoscaling:us-east-1:123456789012:autoScalingGroup:"
            f"uuid-{name}:autoScalingGroupName/{name}"
        ),
        "Tags": [
            {"Key": k, "Value": v, "ResourceId": name, "PropagateAtLaunch": True}
            for k, v in tags.items()
        ],
    }


@pytest.mark.asyncio
async def test_reconstructs_identifier_and_filters(
    paginator_factory, make_clients, recording_counter
) -> None:
    paginator = paginator_factory(
        [
            {"AutoScalingGroups": [_group("web", env="prod"), _group("batch", env="dev")]},
            {"AutoScalingGroups": [_group("api", env="prod", team="core")]},
        ]
    )
    clients = make_clients(autoscaling={"describe_auto_scaling_groups": paginator})
    job = Job("asg", search_tags=(Tag("env", "prod"),))

    resources = await AutoScalingGroupStrategy(recording_counter).discover(clients, job, "us-east-1")

    assert [r.id for r in resources] == [
        "arn:aws:autoscaling:us-east-1:123456789012:autoScalingGroupName/web",
        "arn:aws:autoscaling:us-east-1:123456789012:autoScalingGroupName/api",
    ]
    assert resources[1].tags == [Tag("env", "prod"), Tag("team", "core")]
    assert {r.service for r in resources} == {"asg"}
    assert recording_counter.calls == ["autoscaling", "autoscaling"]


@pytest.mark.asyncio
async def test_skips_groups_with_malformed_arn(
    paginator_factory, make_clients, recording_counter
) -> None:
    broken = {"AutoScalingGroupName": "broken", "AutoScalingGroupARN": "arn:aws:autoscaling", "Tags": []}
    paginator = paginator_factory([{"AutoScalingGroups": [broken, _group("ok")]}])
    clients = make_clients(autoscaling={"describe_auto_scaling_groups": paginator})

    resources = await AutoScalingGroupStrategy(recording_counter).discover(
        clients, Job("asg"), "us-east-1"
    )

    assert [r.id for r in resources] == [
        "arn:aws:autoscaling:us-east-1:123456789012:autoScalingGroupName/ok"
    ]


@pytest.mark.asyncio
async def test_stops_after_one_hundred_pages(
    paginator_factory, make_clients, recording_counter
) -> None:
    paginator = paginator_factory([{"AutoScalingGroups": [_group(f"g{i}")]} for i in range(120)])
    clients = make_clients(autoscaling={"describe_auto_scaling_groups": paginator})

    resources = await AutoScalingGroupStrategy(recording_counter).discover(
        clients, Job("asg"), "us-east-1"
    )

    assert len(resources) == 100
    assert recording_counter.count("autoscaling") == 100


@pytest.mark.asyncio
async def test_provider_error_is_discovery_error(
    paginator_factory, make_clients, recording_counter, throttling_error
) -> None:
    paginator = paginator_factory([{"AutoScalingGroups": [_group("a")]}], error=throttling_error)
    clients = make_clients(autoscaling={"describe_auto_scaling_groups": paginator})

    with pytest.raises(DiscoveryError) as exc:
        await AutoScalingGroupStrategy(recording_counter).discover(clients, Job("asg"), "us-east-1")

    assert exc.value.resources == []
