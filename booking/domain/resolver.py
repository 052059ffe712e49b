from __future__ import annotations

from dataclasses import dataclass

from booking.domain.catalog import PolicyCatalog, policy_catalog
from booking.domain.policies import BookingPolicy
from booking.domain.policy_key import PolicyKey
from booking.domain.registry import PolicyRegistry, policy_registry, to_policy_key
from booking.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ResolvedPolicy:
    policy: BookingPolicy
    is_custom: bool

    @property
    def key(self) -> PolicyKey:
        return self.policy.key


class EffectivePolicyResolver:
    """Merges a location's policy overrides with its type's default policies.

    Result order: every custom policy (in override order), then every default
    whose key is not overridden. Defaults are matched by policy key only, so a
    location never evaluates two policies of the same kind.
    """

    def __init__(
        self,
        registry: PolicyRegistry = policy_registry,
        catalog: PolicyCatalog = policy_catalog,
    ):
        self.registry = registry
        self.catalog = catalog

    def resolve_detailed(self, location) -> list[ResolvedPolicy]:
        custom: dict[PolicyKey, BookingPolicy] = {}
        for override in location.policy_overrides:
            key = to_policy_key(override.policy_key)
            if key in custom:
                raise ConfigurationError(
                    f"Location {location.id} has more than one override for policy {key.value!r}"
                )
            custom[key] = self.registry.create(override)

        defaults = self.catalog.defaults_for(location.location_type)

        resolved = [ResolvedPolicy(policy, True) for policy in custom.values()]
        resolved.extend(
            ResolvedPolicy(policy, False)
            for policy in defaults
            if policy.key not in custom
        )
        return resolved

    def resolve(self, location) -> list[BookingPolicy]:
        return [item.policy for item in self.resolve_detailed(location)]
