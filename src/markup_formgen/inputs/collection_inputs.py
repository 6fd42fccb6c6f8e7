"""
Collection inputs: selects, grouped selects, radio buttons, check boxes and
priority selects.

Collection items can be:

- pairs ``(label, value)``: label is the first element, value the last
- scalars (str, numbers, booleans): label and value are the item itself
- objects: label/value come from the first attribute found in
  ``FormGenConfig.collection_label_methods`` / ``collection_value_methods``

``label_method`` / ``value_method`` options override detection; each may be an
attribute name or a callable taking the item.
"""

import logging
from numbers import Number
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from markup_formgen.core.fragments import Fragment, class_list
from markup_formgen.inputs.base import InputBase, humanize_value

logger = logging.getLogger(__name__)

Accessor = Union[str, Callable[[Any], Any]]

PRIORITY_SEPARATOR = "-------------"


def _first(item: Any) -> Any:
    return item[0]


def _last(item: Any) -> Any:
    return item[-1]


def _identity(item: Any) -> Any:
    return item


def _scalar_label(item: Any) -> str:
    return humanize_value(item)


def _is_pair(item: Any) -> bool:
    return isinstance(item, (list, tuple)) and not isinstance(item, str)


def _is_scalar(item: Any) -> bool:
    return isinstance(item, (str, Number)) or item is None


def call_accessor(accessor: Accessor, item: Any) -> Any:
    """Apply an accessor (attribute name or callable) to an item."""
    if callable(accessor):
        return accessor(item)
    value = getattr(item, accessor)
    return value() if callable(value) else value


class CollectionInput(InputBase):
    """Shared collection handling. Subclasses render the control."""

    def collection(self) -> List[Any]:
        """Items to choose from. Defaults to Yes/No for a boolean choice."""
        collection = self.options.get("collection")
        if collection is None:
            return [("Yes", True), ("No", False)]
        if callable(collection):
            collection = collection()
        return list(collection)

    def detect_collection_methods(self, collection: Sequence[Any]) -> Tuple[Accessor, Accessor]:
        """Return (label accessor, value accessor) for the collection."""
        label_method = self.options.get("label_method")
        value_method = self.options.get("value_method")
        if label_method is not None and value_method is not None:
            return label_method, value_method

        sample = collection[0] if collection else None
        if _is_pair(sample):
            default_label, default_value = _first, _last
        elif _is_scalar(sample):
            default_label, default_value = _scalar_label, _identity
        else:
            default_label = self._find_method(sample, self.config.collection_label_methods, str)
            default_value = self._find_method(sample, self.config.collection_value_methods, _identity)
            logger.debug(f"Detected collection methods for {self.attribute_name}: {default_label!r}, {default_value!r}")

        return label_method or default_label, value_method or default_value

    @staticmethod
    def _find_method(sample: Any, candidates: Iterable[str], fallback: Accessor) -> Accessor:
        for name in candidates:
            if hasattr(sample, name):
                return name
        return fallback

    def items(self) -> List[Tuple[Any, Any]]:
        """(label, value) pairs for the collection."""
        collection = self.collection()
        label_method, value_method = self.detect_collection_methods(collection)
        return [(call_accessor(label_method, item), call_accessor(value_method, item)) for item in collection]

    def selected_values(self) -> List[Any]:
        if "selected" in self.options:
            selected = self.options["selected"]
        else:
            selected = self.value
        if selected is None:
            return []
        if isinstance(selected, (list, tuple, set, frozenset)):
            return list(selected)
        return [selected]

    def is_selected(self, value: Any) -> bool:
        selected = self.selected_values()
        return value in selected or str(value) in [str(item) for item in selected]

    def item_id(self, value: Any) -> str:
        return f"{self.field_id}_{str(value).lower().replace(' ', '_')}"


class CollectionSelectInput(CollectionInput):
    """Select with one option per item."""

    def skip_include_blank(self) -> bool:
        explicit = {"prompt", "include_blank", "selected"}
        return bool(explicit.intersection(self.options)) or self.multiple

    def blank_options(self) -> List[Fragment]:
        fragments = []
        prompt = self.options.get("prompt")
        if prompt:
            text = prompt if isinstance(prompt, str) else "Please select"
            fragments.append(Fragment(component="option", tag="option", content=text, attributes={"value": ""}))
            return fragments

        include_blank = True if not self.skip_include_blank() else self.options.get("include_blank")
        if include_blank:
            text = include_blank if isinstance(include_blank, str) else ""
            fragments.append(Fragment(component="option", tag="option", content=text, attributes={"value": ""}))
        return fragments

    def option_fragment(self, label: Any, value: Any) -> Fragment:
        attributes: Dict[str, Any] = {"value": value}
        if self.is_selected(value):
            attributes["selected"] = True
        return Fragment(component="option", tag="option", content=label, attributes=attributes)

    def option_fragments(self) -> List[Fragment]:
        return [self.option_fragment(label, value) for label, value in self.items()]

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        children = tuple(self.blank_options() + self.option_fragments())
        return Fragment(
            component="input",
            tag="select",
            attributes=self.control_attributes(wrapper_options),
            children=children,
        )


class GroupedCollectionSelectInput(CollectionSelectInput):
    """
    Select with option groups.

    The collection holds groups; ``group_method`` (default: last element of a
    pair) returns a group's items and ``group_label_method`` (default: first
    element of a pair, else the configured label methods) its label.
    """

    def group_accessors(self, sample: Any) -> Tuple[Accessor, Accessor]:
        group_method = self.options.get("group_method")
        group_label_method = self.options.get("group_label_method")
        if _is_pair(sample):
            return group_label_method or _first, group_method or _last
        if group_method is None:
            raise ValueError(
                f"Grouped select for '{self.attribute_name}' needs a group_method for {type(sample).__name__} groups"
            )
        return group_label_method or self._find_method(sample, self.config.collection_label_methods, str), group_method

    def option_fragments(self) -> List[Fragment]:
        groups = self.collection()
        if not groups:
            return []
        group_label_method, group_method = self.group_accessors(groups[0])

        fragments = []
        for group in groups:
            members = list(call_accessor(group_method, group))
            label_method, value_method = self.detect_collection_methods(members)
            options = tuple(
                self.option_fragment(call_accessor(label_method, item), call_accessor(value_method, item))
                for item in members
            )
            fragments.append(Fragment(
                component="optgroup",
                tag="optgroup",
                attributes={"label": call_accessor(group_label_method, group)},
                children=options,
            ))
        return fragments


class CollectionRadioButtonsInput(CollectionInput):
    """
    One radio button with its label per item.

    A non-boolean ``disabled`` option lists the item values to disable.
    ``collection_wrapper_tag`` / ``collection_wrapper_class`` wrap the items.
    """

    item_type = "radio"
    item_wrapper_tag = "span"

    def item_name(self) -> str:
        return self.field_name

    def item_fragment(self, wrapper_options: Dict[str, Any], label: Any, value: Any) -> Fragment:
        item_id = self.item_id(value)
        attributes = self.control_attributes(wrapper_options, type=self.item_type, value=value)
        attributes["id"] = item_id
        attributes["name"] = self.item_name()
        if self.is_selected(value):
            attributes["checked"] = True
        if value in self.disabled_values():
            attributes["disabled"] = True
        control = Fragment(component="item_input", tag="input", attributes=attributes)
        item_label = Fragment(
            component="item_label",
            tag="label",
            content=label,
            attributes={"for": item_id, "class": class_list("collection_" + self.item_type)},
        )
        return Fragment(
            component="item",
            tag=self.options.get("item_wrapper_tag", self.item_wrapper_tag),
            attributes={"class": class_list(self.options.get("item_wrapper_class"), self.item_type)},
            children=(control, item_label),
        )

    def disabled_values(self) -> List[Any]:
        disabled = self.options.get("disabled")
        if disabled is None or isinstance(disabled, bool):
            return []
        if isinstance(disabled, (list, tuple, set, frozenset)):
            return list(disabled)
        return [disabled]

    def leading_fragments(self) -> List[Fragment]:
        return []

    def input(self, wrapper_options: Optional[Dict[str, Any]] = None) -> Fragment:
        wrapper_options = wrapper_options or {}
        items = [self.item_fragment(wrapper_options, label, value) for label, value in self.items()]
        tag = self.options.get("collection_wrapper_tag")
        attributes = {}
        if tag:
            attributes["class"] = class_list(self.options.get("collection_wrapper_class"))
        return Fragment(component="input", tag=tag, attributes=attributes, children=tuple(self.leading_fragments() + items))


class CollectionCheckBoxesInput(CollectionRadioButtonsInput):
    """
    One check box per item, submitted as a list.

    A hidden empty value comes first so that unchecking every box still
    submits the attribute.
    """

    item_type = "checkbox"

    @property
    def multiple(self) -> bool:
        return True

    def leading_fragments(self) -> List[Fragment]:
        hidden = Fragment(
            component="hidden",
            tag="input",
            attributes={"type": "hidden", "name": self.field_name, "value": ""},
        )
        return [hidden]


class PriorityInput(CollectionSelectInput):
    """
    Select that lists priority items first, then a disabled separator, then
    the rest of the collection.

    Priority comes from the ``priority`` option, else from
    ``FormGenConfig.country_priority`` / ``time_zone_priority``.
    """

    def collection(self) -> List[Any]:
        collection = self.options.get("collection")
        if collection is None:
            return []
        if callable(collection):
            collection = collection()
        return list(collection)

    def priority(self) -> List[Any]:
        priority = self.options.get("priority")
        if priority is None:
            priority = getattr(self.config, f"{self.input_type}_priority", None)
        return list(priority or [])

    def option_fragments(self) -> List[Fragment]:
        priority = self.priority()
        items = self.items()
        if not priority:
            return [self.option_fragment(label, value) for label, value in items]

        priority_keys = [str(item) for item in priority]
        by_value = {str(value): (label, value) for label, value in items}
        leading = [by_value.get(key, (humanize_value(item), item)) for key, item in zip(priority_keys, priority)]
        remaining = [(label, value) for label, value in items if str(value) not in priority_keys]

        separator = Fragment(
            component="option",
            tag="option",
            content=PRIORITY_SEPARATOR,
            attributes={"value": "", "disabled": True},
        )
        return (
            [self.option_fragment(label, value) for label, value in leading]
            + [separator]
            + [self.option_fragment(label, value) for label, value in remaining]
        )
