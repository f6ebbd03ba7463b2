from __future__ import annotations

from typing import Callable, Dict, List, Optional, Type

from cloudtag_exporter.modules.discovery.domain.strategy import DiscoveryStrategy
from cloudtag_exporter.shared.core.exceptions import ConfigurationError

# Resource type key -> Resource Groups Tagging API ResourceTypeFilters.
# Supporting a new type is an edit to this table.
RESOURCE_TYPE_FILTERS: Dict[str, List[str]] = {
    "alb": ["elasticloadbalancing:loadbalancer/app", "elasticloadbalancing:targetgroup"],
    "apigateway": ["apigateway"],
    "appsync": ["appsync"],
    "cf": ["cloudfront"],
    "dynamodb": ["dynamodb:table"],
    "ebs": ["ec2:volume"],
    "ec": ["elasticache:cluster"],
    "ec2": ["ec2:instance"],
    "ecs-svc": ["ecs:cluster", "ecs:service"],
    "ecs-containerinsights": ["ecs:cluster", "ecs:service"],
    "efs": ["elasticfilesystem:file-system"],
    "elb": ["elasticloadbalancing:loadbalancer"],
    "emr": ["elasticmapreduce:cluster"],
    "es": ["es:domain"],
    "firehose": ["firehose"],
    "fsx": ["fsx:file-system"],
    "kinesis": ["kinesis:stream"],
    "lambda": ["lambda:function"],
    "ngw": ["ec2:natgateway"],
    "nlb": ["elasticloadbalancing:loadbalancer/net"],
    "rds": ["rds:db"],
    "redshift": ["redshift:cluster"],
    "r53r": ["route53resolver"],
    "s3": ["s3"],
    "sfn": ["states"],
    "sns": ["sns"],
    "sqs": ["sqs"],
    "tgw": ["ec2:transit-gateway"],
    "vpn": ["ec2:vpn-connection"],
    "kafka": ["kafka:cluster"],
}


def get_resource_type_filters(resource_type: str) -> List[str]:
    """Tagging API filters for `resource_type`; unknown keys are a configuration error."""
    filters = RESOURCE_TYPE_FILTERS.get(resource_type)
    if filters is None:
        raise ConfigurationError(
            f"Not implemented resource type: {resource_type}",
            code="unsupported_resource_type",
            details={"resource_type": resource_type},
        )
    return list(filters)


class DiscoveryStrategyRegistry:
    """
    Registry of discovery strategies, keyed by resource type.

    Types with a dedicated strategy are registered explicitly; every other key
    of RESOURCE_TYPE_FILTERS is served by the registered generic strategy.
    """

    _registry: Dict[str, Type[DiscoveryStrategy]] = {}
    _generic: Optional[Type[DiscoveryStrategy]] = None

    @classmethod
    def register(
        cls, resource_type: str
    ) -> Callable[[Type[DiscoveryStrategy]], Type[DiscoveryStrategy]]:
        """Decorator to register a dedicated strategy for one resource type."""

        def wrapper(strategy_cls: Type[DiscoveryStrategy]) -> Type[DiscoveryStrategy]:
            existing = cls._registry.get(resource_type)
            # Allow idempotent module reload registration, but reject conflicting overrides.
            if existing is not None and existing is not strategy_cls:
                raise ValueError(
                    f"Duplicate discovery strategy registration for {resource_type}: "
                    f"{existing.__name__} vs {strategy_cls.__name__}"
                )
            cls._registry[resource_type] = strategy_cls
            return strategy_cls

        return wrapper

    @classmethod
    def register_generic(cls, strategy_cls: Type[DiscoveryStrategy]) -> Type[DiscoveryStrategy]:
        """Decorator marking the strategy that serves the plain tagging-API types."""
        if cls._generic is not None and cls._generic is not strategy_cls:
            raise ValueError(
                f"Duplicate generic discovery strategy: "
                f"{cls._generic.__name__} vs {strategy_cls.__name__}"
            )
        cls._generic = strategy_cls
        return strategy_cls

    @classmethod
    def get_strategy_class(cls, resource_type: str) -> Type[DiscoveryStrategy]:
        strategy_cls = cls._registry.get(resource_type)
        if strategy_cls is not None:
            return strategy_cls
        if resource_type in RESOURCE_TYPE_FILTERS and cls._generic is not None:
            return cls._generic
        raise ConfigurationError(
            f"Not implemented resource type: {resource_type}",
            code="unsupported_resource_type",
            details={
                "resource_type": resource_type,
                "supported": cls.supported_resource_types(),
            },
        )

    @classmethod
    def supported_resource_types(cls) -> List[str]:
        keys = set(cls._registry)
        if cls._generic is not None:
            keys.update(RESOURCE_TYPE_FILTERS)
        return sorted(keys)
