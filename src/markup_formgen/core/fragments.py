"""
Abstract rendering fragments.

A Fragment is what the field renderer hands to the template layer: a
component name, an element hint, content and attributes. Turning fragments
into literal markup is the template layer's job.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Optional, Sequence, Tuple


@dataclass(frozen=True)
class Fragment:
    """One rendered unit of a field.

    Attributes:
        component: Component that produced it ("label", "input", "hint", "error",
            "wrapper", "option", ...)
        tag: Element hint for the template layer, None for untagged groups
        content: Text or caller-supplied content
        attributes: Element attributes; "class" holds a tuple of class names
        children: Nested fragments in render order
    """
    component: str
    tag: Optional[str] = None
    content: Any = None
    attributes: Dict[str, Any] = field(default_factory=dict)
    children: Tuple["Fragment", ...] = ()

    @property
    def classes(self) -> Tuple[str, ...]:
        """Class names of this fragment."""
        return tuple(self.attributes.get("class", ()))

    def find(self, component: str) -> Optional["Fragment"]:
        """Return the first descendant (or self) produced by a component."""
        for fragment in self.walk():
            if fragment.component == component:
                return fragment
        return None

    def walk(self) -> Iterator["Fragment"]:
        """Iterate over this fragment and its descendants depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()

    @classmethod
    def group(cls, children: Iterable["Fragment"], component: str = "group") -> "Fragment":
        """Build an untagged fragment holding children in order."""
        return cls(component=component, children=tuple(children))


def class_list(*groups: Any) -> Tuple[str, ...]:
    """
    Flatten class names into a de-duplicated tuple, preserving order.

    Each group may be None, a string (split on whitespace) or a sequence of
    strings / None.

    Example:
        >>> class_list("string", ["required", None], "input  string")
        ('string', 'required', 'input')
    """
    result = []
    for group in groups:
        if not group:
            continue
        items: Sequence[Any] = group.split() if isinstance(group, str) else group
        for item in items:
            if not item:
                continue
            for name in str(item).split():
                if name not in result:
                    result.append(name)
    return tuple(result)
