"""Custom validator hooks.

A registry holds named hooks that add project-specific checks to a batch
validation pass. Each hook call is isolated: an exception raised by one hook
becomes a VALIDATOR_ERROR issue and the pass continues with the remaining
hooks and usages.

Example:
    >>> registry = ValidatorRegistry()
    >>> registry.register("no-ghost", forbid_ghost, components=["Button"])
    >>> issues = registry.execute(usages, config)
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from stylekit.core.log import get_logger
from stylekit.diagnostics import IssueCode, Severity, ValidationIssue, usage_path
from stylekit.schema import DesignSystemConfig, PropertyUsage

logger = get_logger(__name__)

HookResult = ValidationIssue | list[ValidationIssue] | None
ValidatorHook = Callable[[PropertyUsage, DesignSystemConfig | None], HookResult]


@dataclass(frozen=True)
class ValidatorRegistration:
    """A named hook, optionally limited to some components."""

    name: str
    validator: ValidatorHook
    components: tuple[str, ...] | None = None

    def applies_to(self, component: str) -> bool:
        return self.components is None or component in self.components


class ValidatorRegistry:
    """Explicitly constructed collection of validator hooks.

    Hooks run in registration order. Registering an existing name replaces
    the previous hook in place.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, ValidatorRegistration] = {}

    def register(
        self,
        name: str,
        validator: ValidatorHook,
        components: Iterable[str] | None = None,
    ) -> None:
        """Add a hook.

        Args:
            name: Unique hook name, used in VALIDATOR_ERROR messages.
            validator: Callable taking (usage, config) and returning an
                issue, a list of issues, or None.
            components: Restrict the hook to these component names.
        """
        if name in self._registrations:
            logger.debug(f"Replacing validator '{name}'")
        self._registrations[name] = ValidatorRegistration(
            name=name,
            validator=validator,
            components=tuple(components) if components is not None else None,
        )

    def unregister(self, name: str) -> bool:
        """Remove a hook. Returns False when no hook had that name."""
        return self._registrations.pop(name, None) is not None

    def names(self) -> list[str]:
        return list(self._registrations)

    def __len__(self) -> int:
        return len(self._registrations)

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def execute(
        self,
        usages: Iterable[PropertyUsage],
        config: DesignSystemConfig | None = None,
    ) -> list[ValidationIssue]:
        """Run every applicable hook against every usage.

        Returns:
            Issues produced by the hooks, plus one VALIDATOR_ERROR issue per
            hook call that raised or returned something other than issues.
        """
        issues: list[ValidationIssue] = []
        for usage in usages:
            for registration in self._registrations.values():
                if not registration.applies_to(usage.component):
                    continue
                try:
                    issues.extend(_collect(registration.validator(usage, config)))
                except Exception as e:
                    logger.warning(
                        f"Validator '{registration.name}' failed on "
                        f"{usage.component}: {e}"
                    )
                    issues.append(
                        ValidationIssue(
                            severity=Severity.ERROR,
                            code=IssueCode.VALIDATOR_ERROR,
                            message=(
                                f'Validator "{registration.name}" failed: '
                                f"{str(e) or type(e).__name__}"
                            ),
                            path=usage_path(usage),
                        )
                    )
        return issues


def _collect(result: HookResult) -> list[ValidationIssue]:
    if result is None:
        return []
    if isinstance(result, ValidationIssue):
        return [result]
    if isinstance(result, (list, tuple)):
        for item in result:
            if not isinstance(item, ValidationIssue):
                raise TypeError(f"hook returned {type(item).__name__}, not an issue")
        return list(result)
    raise TypeError(f"hook returned {type(result).__name__}, not an issue")


__all__ = [
    "HookResult",
    "ValidatorHook",
    "ValidatorRegistration",
    "ValidatorRegistry",
]
