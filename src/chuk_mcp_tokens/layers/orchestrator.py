"""
Layer orchestrator - generates tiers in dependency order.

Tiers form a three-node DAG:

    primitive  <- semantic <- component

For a requested set of tiers the orchestrator takes the dependency
closure (depth-first, de-duplicated), then decides per tier:

- requested explicitly, or force: regenerate
- otherwise: regenerate only if its artifact is missing

Each tier is persisted before the next one starts, and each builder reads
its input back from the store. A missing dependency artifact aborts the
run; nothing stale is substituted.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from chuk_mcp_tokens.builders import build_components, build_primitives, build_semantic
from chuk_mcp_tokens.config import TokenizeConfig
from chuk_mcp_tokens.constants import TIER_DEPENDENCIES, ErrorMessages, Tier
from chuk_mcp_tokens.errors import MissingDependencyError, OrchestrationError
from chuk_mcp_tokens.layers.store import ArtifactStore
from chuk_mcp_tokens.models.token import TokenTree

logger = logging.getLogger(__name__)

# Plural spellings match the artifact file stems
_TIER_ALIASES: dict[str, Tier] = {
    "primitive": Tier.PRIMITIVE,
    "primitives": Tier.PRIMITIVE,
    "semantic": Tier.SEMANTIC,
    "semantics": Tier.SEMANTIC,
    "component": Tier.COMPONENT,
    "components": Tier.COMPONENT,
}


def parse_tier(name: str | Tier) -> Tier:
    """
    Parse a tier name.

    Raises:
        OrchestrationError: If the name is not a known tier
    """
    if isinstance(name, Tier):
        return name
    tier = _TIER_ALIASES.get(str(name).strip().lower())
    if tier is None:
        raise OrchestrationError(ErrorMessages.UNKNOWN_TIER.format(tier=name))
    return tier


def dependency_order(requested: Iterable[Tier]) -> list[Tier]:
    """
    Dependency closure of the requested tiers, dependencies first.

    Raises:
        OrchestrationError: If the dependency graph contains a cycle
    """
    order: list[Tier] = []
    visiting: set[Tier] = set()

    def visit(tier: Tier) -> None:
        if tier in order:
            return
        if tier in visiting:
            raise OrchestrationError(f"Dependency cycle at tier '{tier.value}'")
        visiting.add(tier)
        for dependency in TIER_DEPENDENCIES[tier]:
            visit(dependency)
        visiting.discard(tier)
        order.append(tier)

    for tier in requested:
        visit(tier)
    return order


@dataclass
class GenerationPlan:
    """Which tiers a run would touch, and which it would regenerate."""

    requested: list[Tier]
    order: list[Tier]
    to_run: list[Tier]

    @property
    def skipped(self) -> list[Tier]:
        return [t for t in self.order if t not in self.to_run]

    def to_dict(self) -> dict[str, Any]:
        return {
            "requested": [t.value for t in self.requested],
            "order": [t.value for t in self.order],
            "to_run": [t.value for t in self.to_run],
            "skipped": [t.value for t in self.skipped],
        }


@dataclass
class RunResult:
    """Outcome of an orchestrated run."""

    plan: GenerationPlan
    generated: list[Tier] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)
    dry_run: bool = False

    @property
    def skipped(self) -> list[Tier]:
        return self.plan.skipped

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.plan.to_dict(),
            "generated": [t.value for t in self.generated],
            "files": [str(p) for p in self.files],
            "dry_run": self.dry_run,
        }


class LayerOrchestrator:
    """
    Generates token tiers through an artifact store.

    Example:
        orchestrator = LayerOrchestrator(TokenizeConfig(out_dir=Path("dist")))
        result = orchestrator.run(["component"])
        # primitive, semantic and component are generated, in that order
    """

    def __init__(self, config: TokenizeConfig, store: ArtifactStore | None = None):
        """
        Initialize the orchestrator.

        Args:
            config: Generation settings
            store: Artifact store (default: one rooted at config.out_dir)
        """
        self.config = config
        self.store = store or ArtifactStore(config.out_dir)

    def plan(self, requested: Iterable[str | Tier], force: bool = False) -> GenerationPlan:
        """
        Work out the generation order without touching any artifact.

        Args:
            requested: Tiers asked for by the caller
            force: Regenerate every tier in the closure

        Returns:
            The generation plan
        """
        tiers = list(dict.fromkeys(parse_tier(t) for t in requested))
        order = dependency_order(tiers)
        to_run = [t for t in order if force or t in tiers or not self.store.exists(t)]
        return GenerationPlan(requested=tiers, order=order, to_run=to_run)

    def run(
        self,
        requested: Iterable[str | Tier],
        force: bool = False,
        dry_run: bool = False,
    ) -> RunResult:
        """
        Generate the requested tiers and whatever they depend on.

        Args:
            requested: Tiers asked for by the caller
            force: Regenerate every tier in the closure
            dry_run: Return the plan without generating

        Returns:
            RunResult with generated tiers and written files

        Raises:
            MissingDependencyError: If a dependency artifact is absent
            InputError: If the scanned values or an artifact cannot be read
        """
        plan = self.plan(requested, force)
        result = RunResult(plan=plan, dry_run=dry_run)

        if not plan.to_run:
            logger.info("All requested tiers already exist")
            return result
        if dry_run:
            logger.info(f"Dry run, would generate: {' -> '.join(t.value for t in plan.to_run)}")
            return result

        logger.info(f"Token tiers to generate: {' -> '.join(t.value for t in plan.to_run)}")
        for tier in plan.to_run:
            self._check_dependencies(tier)
            result.files.extend(self.generate(tier))
            result.generated.append(tier)
        return result

    def run_all(self, force: bool = False) -> RunResult:
        """Generate every tier."""
        return self.run(list(Tier), force=force)

    def build(self, tier: Tier) -> TokenTree:
        """Build one tier's tree from its persisted input."""
        if tier is Tier.PRIMITIVE:
            return build_primitives(self.store.read_scan(), self.config.spacing_base)
        if tier is Tier.SEMANTIC:
            return build_semantic(self.store.read(Tier.PRIMITIVE))
        # The catalog is static, but the semantic artifact must still be readable
        self.store.read(Tier.SEMANTIC)
        return build_components()

    def generate(self, tier: Tier) -> list[Path]:
        """Build one tier and persist every configured encoding."""
        logger.info(f"Generating {tier.value} tokens")
        tree = self.build(tier)
        return self.store.write(
            tier, tree, self.config.output_formats, self.config.leaf_shape
        )

    def _check_dependencies(self, tier: Tier) -> None:
        for dependency in TIER_DEPENDENCIES[tier]:
            if not self.store.exists(dependency):
                raise MissingDependencyError(tier.value, dependency.value)
