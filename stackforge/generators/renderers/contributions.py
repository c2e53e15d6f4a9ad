"""What each feature adds to shared manifests and the root layout.

Feature renderers own their package dependencies and context providers; the
structure renderers that write ``package.json`` and ``layout.tsx`` only merge
what the features declare.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Provider:
    """A React context provider wrapped around the app body."""

    import_line: str
    open_tag: str
    close_tag: str
    order: int = 50


@dataclass
class Contribution:
    """Package and layout additions declared by one feature."""

    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)
    scripts: dict[str, str] = field(default_factory=dict)
    providers: list[Provider] = field(default_factory=list)
    next_config: dict[str, str] = field(default_factory=dict)

    def merge(self, other: "Contribution") -> "Contribution":
        return Contribution(
            dependencies={**self.dependencies, **other.dependencies},
            dev_dependencies={**self.dev_dependencies, **other.dev_dependencies},
            scripts={**self.scripts, **other.scripts},
            providers=[*self.providers, *other.providers],
            next_config={**self.next_config, **other.next_config},
        )


def merge_all(contributions: list[Contribution]) -> Contribution:
    merged = Contribution()
    for contribution in contributions:
        merged = merged.merge(contribution)
    merged.providers.sort(key=lambda p: p.order)
    return merged


def sorted_deps(deps: dict[str, str]) -> dict[str, str]:
    return dict(sorted(deps.items()))
