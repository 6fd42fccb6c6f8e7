"""
Field renderer: the form builder.

Binds an object name and an optional bound model, and turns attribute names
into Fragment trees:

    renderer = FieldRenderer("user", DataclassModel(user))
    renderer.render_field("email")        # wrapper > label, input, hint, error
    renderer.render_field_only("email")   # just the control
    renderer.association("company")       # select for company_id

Design:
- Type inference, input discovery and wrapper selection are delegated to
  TypeResolver, MappingResolver and WrapperResolver
- Inputs talk back to the renderer for model state (errors, required,
  values, ids); the renderer is the only object that touches the bound model
- The discovery cache is shared process-wide when ``cache_discovery`` is set,
  else owned by the renderer
"""

import logging
import re
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Type

import inflection

from markup_formgen.core.discovery_cache import create_discovery_cache
from markup_formgen.core.fragments import Fragment, class_list
from markup_formgen.core.options import deep_merge, without
from markup_formgen.exceptions import ConfigurationError
from markup_formgen.forms.association import (
    AssociationAttributeResolver, AssociationCollectionResolver, AssociationReference,
)
from markup_formgen.forms.form_constants import ACTIONS, CONSTANTS
from markup_formgen.forms.input_registry import INPUT_MAPPINGS
from markup_formgen.forms.mapping_resolver import MappingResolver
from markup_formgen.forms.type_resolver import TypeResolver
from markup_formgen.forms.wrapper_resolver import WrapperRef, WrapperResolver
from markup_formgen.forms.wrappers import ComponentSpec, WrapperDefinition
from markup_formgen.inputs import (
    BlockInput, CollectionCheckBoxesInput, CollectionRadioButtonsInput, ComponentsOnlyInput, FieldDescriptor, InputBase,
)
from markup_formgen.inputs.collection_inputs import Accessor
from markup_formgen.protocols.bound_model import AttributeMetadata, AssociationReflection, BoundModel
from markup_formgen.protocols.form_config import FormGenConfig, get_form_config

logger = logging.getLogger(__name__)

_MODEL_NAME_PATTERN = re.compile(r"(?!\d)\w+")
_ID_SANITIZE_PATTERN = re.compile(r"\]\[|[^-a-zA-Z0-9:.]")

BUTTON_KINDS = ("submit", "button", "reset")


class FieldRenderer:
    """
    Renders fields of one bound object.

    Args:
        object_name: Name used for field names and ids ("user", "user[address_attributes]")
        bound_model: Model supplying values, metadata, errors and associations
        config: Configuration; defaults to the global FormGenConfig
        defaults: Options deep-merged under every call's options
        wrapper: Form wrapper (definition or registered name); defaults to
            ``config.default_wrapper``
        wrapper_mappings: Per-form semantic type -> wrapper mapping
        action_name: Action the form is rendered for ("create", "edit"...)
        child_index: Index of this form inside a nested collection, ignored by
            lookup_model_names
    """

    def __init__(
        self,
        object_name: str,
        bound_model: Optional[BoundModel] = None,
        *,
        config: Optional[FormGenConfig] = None,
        defaults: Optional[Dict[str, Any]] = None,
        wrapper: Optional[WrapperRef] = None,
        wrapper_mappings: Optional[Dict[str, WrapperRef]] = None,
        action_name: Optional[str] = None,
        child_index: Optional[Any] = None,
    ):
        self.object_name = str(object_name)
        self.bound_model = bound_model
        self.config = config if config is not None else get_form_config()
        self.defaults = defaults
        self.wrapper_mappings = wrapper_mappings
        self.action_name = action_name
        self.child_index = child_index

        self.wrapper = WrapperResolver.resolve_reference(wrapper or self.config.default_wrapper)
        self.type_resolver = TypeResolver(self.config.input_mappings)
        self.wrapper_resolver = WrapperResolver()
        self.mapping_resolver = MappingResolver(
            INPUT_MAPPINGS,
            custom_namespaces=self.config.custom_inputs_namespaces,
            inputs_discovery=self.config.inputs_discovery,
            cache=create_discovery_cache(self.config.cache_discovery),
        )
        self.attribute_resolver = AssociationAttributeResolver()
        self.collection_resolver = AssociationCollectionResolver()

    # ==================== FIELD RENDERING ====================

    def render_field(
        self,
        attribute_name: str,
        options: Optional[Dict[str, Any]] = None,
        block: Optional[Callable[[], Any]] = None,
    ) -> Fragment:
        """
        Render a complete field: the wrapper and its components.

        Args:
            attribute_name: Attribute to render
            options: Call-site options, merged over the form defaults
            block: Optional callable whose result replaces the control

        Returns:
            The wrapper fragment (an untagged "field" group when wrapping is disabled)
        """
        options = deep_merge(self.defaults, options)
        input = self.find_input(attribute_name, options, block)
        wrapper = self.find_wrapper(input.input_type, options)
        logger.debug(f"Rendering {self.object_name}.{attribute_name} as {input!r} with wrapper '{wrapper.name}'")
        return wrapper.render(input)

    def render_field_only(self, attribute_name: str, options: Optional[Dict[str, Any]] = None) -> Fragment:
        """
        Render only the control of a field.

        Attribute decorators of the field's wrapper still apply; every other
        option (except the reserved ones) becomes a control attribute. Label,
        hint and error are never rendered.

        Returns:
            The control fragment
        """
        options = dict(options or {})
        merged = deep_merge(self.defaults, options)
        input_type = self.default_input_type(attribute_name, merged, self.column_for(attribute_name))
        wrapper = self.find_wrapper(input_type, merged)

        decorators = [name for name in wrapper.component_names if name in CONSTANTS.ATTRIBUTE_COMPONENTS]
        excluded = CONSTANTS.INPUT_FIELD_RESERVED_OPTIONS + tuple(decorators) + ("input_html",)
        options["input_html"] = {**(options.get("input_html") or {}), **without(options, excluded)}
        options = deep_merge(self.defaults, options)

        input = self.find_input(attribute_name, options)
        components = [ComponentSpec(name) for name in decorators]
        components.append(ComponentSpec(CONSTANTS.CONTROL_COMPONENT, self.input_field_options()))
        definition = WrapperDefinition(
            name=f"{wrapper.name}:input_field",
            components=tuple(components),
            options={**wrapper.options, "wrapper": False},
        )
        fragments = definition.render_components(input)
        return fragments[0] if fragments else Fragment.group((), component=CONSTANTS.CONTROL_COMPONENT)

    def input_field_options(self) -> Dict[str, Any]:
        """Validation classes passed to the control in control-only rendering."""
        field_options = {}
        if self.config.input_field_error_class:
            field_options["error_class"] = self.config.input_field_error_class
        if self.config.input_field_valid_class:
            field_options["valid_class"] = self.config.input_field_valid_class
        return field_options

    # ==================== ASSOCIATIONS ====================

    def association(self, association: str, options: Optional[Dict[str, Any]] = None) -> Fragment:
        """
        Render a field for an association.

        ``company`` (belongs_to) renders ``company_id``; ``tags`` (has_many)
        renders ``tag_ids`` as a multiple select. The collection defaults to
        the association's records.

        Raises:
            ConfigurationError: Without a bound model, for unknown associations
                and for has_one associations
        """
        if self.bound_model is None:
            raise ConfigurationError("Association cannot be used in forms not associated with an object")

        reflection = self.bound_model.reflect_on_association(association)
        if reflection is None:
            raise ConfigurationError(f"Association '{association}' not found on {self.object_name}")

        options = dict(options or {})
        if not options.get("as"):
            options["as"] = CONSTANTS.SELECT_TYPE

        attribute = self.attribute_resolver.resolve(
            AssociationReference.from_reflection(reflection), options, self.bound_model,
        )
        options["collection"] = self.collection_resolver.fetch(
            reflection, options.get("collection"), self.bound_model,
        )
        options["reflection"] = reflection
        logger.debug(f"Association '{association}' -> {attribute.attribute_name} ({attribute.cardinality.value})")
        return self.render_field(attribute.attribute_name, options)

    # ==================== STANDALONE COMPONENTS ====================

    def button(self, kind: str, value: Optional[str] = None, **options: Any) -> Fragment:
        """
        Render a button. The configured button class comes first in its class list.

        Args:
            kind: "submit", "button" or "reset"
            value: Caption; submit buttons default to "Create {model}" / "Update {model}"
            **options: Extra button attributes
        """
        if kind not in BUTTON_KINDS:
            raise ValueError(f"Unknown button kind '{kind}'. Expected one of {BUTTON_KINDS}")

        attributes = dict(options)
        attributes["class"] = class_list(self.config.button_class, options.get("class"))

        if kind == "submit":
            attributes = {"type": "submit", "name": "commit", "value": value or self.submit_default_value(), **attributes}
            return Fragment(component="button", tag="input", attributes=attributes)
        if kind == "reset":
            attributes = {"type": "reset", "value": value or "Reset", **attributes}
            return Fragment(component="button", tag="input", attributes=attributes)

        attributes = {"type": "submit", "name": "button", **attributes}
        return Fragment(component="button", tag="button", content=value or "Button", attributes=attributes)

    def submit_default_value(self) -> str:
        if self.bound_model is not None:
            model = self.bound_model.model_name
            persisted = self.bound_model.persisted
        else:
            model = inflection.humanize(self.object_name)
            persisted = False
        return f"{'Update' if persisted else 'Create'} {model}"

    def error(self, attribute_name: str, **options: Any) -> Optional[Fragment]:
        """Render the error component of an attribute, or None without errors."""
        options["error_html"] = without(options, CONSTANTS.ERROR_RESERVED_OPTIONS)
        return self.render_standalone(attribute_name, options, "error")

    def full_error(self, attribute_name: str, **options: Any) -> Optional[Fragment]:
        """Like error, with the human attribute name in front of the message."""
        options.setdefault("error_prefix", self.human_attribute_name(attribute_name))
        return self.error(attribute_name, **options)

    def hint(self, attribute_name: Optional[str] = None, hint: Optional[str] = None, **options: Any) -> Optional[Fragment]:
        """Render a hint for an attribute, or a free-standing hint text."""
        options["hint_html"] = without(options, CONSTANTS.HINT_RESERVED_OPTIONS)
        if hint is not None:
            options["hint"] = hint
        return self.render_standalone(attribute_name, options, "hint")

    def label(self, attribute_name: str, text: Optional[str] = None, **options: Any) -> Fragment:
        """
        Render a label.

        With ``text``, a plain label pointing at the attribute's control.
        Otherwise the input label (human name and required marker).
        """
        if text is not None:
            attributes = {"for": self.field_id(attribute_name), **options}
            if "class" in attributes:
                attributes["class"] = class_list(attributes["class"])
            return Fragment(component="label", tag="label", content=text, attributes=attributes)

        options["label_html"] = without(options, CONSTANTS.LABEL_RESERVED_OPTIONS)
        return self.render_standalone(attribute_name, options, "label")

    def error_notification(self, message: Optional[str] = None, **options: Any) -> Optional[Fragment]:
        """Form-level error banner; None unless the bound model has errors."""
        if self.bound_model is None or not self.bound_model.has_errors:
            return None
        tag = options.pop("tag", None) or self.config.error_notification_tag
        attributes = dict(options)
        attributes["class"] = class_list(self.config.error_notification_class, options.get("class"))
        return Fragment(
            component="error_notification",
            tag=tag,
            content=message or self.config.error_notification_message,
            attributes=attributes,
        )

    def collection_radio_buttons(
        self,
        attribute_name: str,
        collection: Iterable[Any],
        value_method: Accessor,
        text_method: Accessor,
        options: Optional[Dict[str, Any]] = None,
        html_options: Optional[Dict[str, Any]] = None,
    ) -> Fragment:
        """
        Render one radio button and label per item, without any wrapper.

        Args:
            attribute_name: Attribute the radio buttons submit
            collection: Items to choose from
            value_method: Attribute name or callable giving each item's value
            text_method: Attribute name or callable giving each item's label
            options: ``checked`` (initially checked value), ``disabled`` (values to
                disable), ``item_wrapper_tag`` / ``item_wrapper_class`` and
                ``collection_wrapper_tag`` / ``collection_wrapper_class``
            html_options: Attributes for every radio button

        Example:
            >>> renderer.collection_radio_buttons("plan", plans, "code", "title")
        """
        return self.render_collection(
            CollectionRadioButtonsInput, "radio_buttons",
            attribute_name, collection, value_method, text_method, options, html_options,
        )

    def collection_check_boxes(
        self,
        attribute_name: str,
        collection: Iterable[Any],
        value_method: Accessor,
        text_method: Accessor,
        options: Optional[Dict[str, Any]] = None,
        html_options: Optional[Dict[str, Any]] = None,
    ) -> Fragment:
        """Like collection_radio_buttons, with check boxes submitted as a list."""
        return self.render_collection(
            CollectionCheckBoxesInput, "check_boxes",
            attribute_name, collection, value_method, text_method, options, html_options,
        )

    def render_collection(
        self,
        input_class: Type[InputBase],
        input_type: str,
        attribute_name: str,
        collection: Iterable[Any],
        value_method: Accessor,
        text_method: Accessor,
        options: Optional[Dict[str, Any]],
        html_options: Optional[Dict[str, Any]],
    ) -> Fragment:
        options = dict(options or {})
        if "checked" in options:
            options["selected"] = options.pop("checked")
        options.update(
            collection=list(collection),
            value_method=value_method,
            label_method=text_method,
            input_html=deep_merge((self.defaults or {}).get("input_html"), html_options),
        )
        descriptor = FieldDescriptor(attribute_name, input_type, self.column_for(attribute_name), options)
        logger.debug(f"Rendering {input_type} collection for {attribute_name}")
        return input_class(self, descriptor).input({})

    def render_standalone(self, attribute_name: Optional[str], options: Dict[str, Any], component: str) -> Optional[Fragment]:
        """Render one component of the form wrapper outside any field."""
        if attribute_name is None:
            descriptor = FieldDescriptor(name="", semantic_type=CONSTANTS.STRING_TYPE, options=options)
        else:
            column = self.column_for(attribute_name)
            input_type = self.default_input_type(attribute_name, options, column)
            descriptor = FieldDescriptor(attribute_name, input_type, column, options)

        spec = self.wrapper.find(component)
        render_options = spec.render_options if spec is not None else {}
        return ComponentsOnlyInput(self, descriptor).render_component(component, render_options)

    # ==================== LOOKUPS ====================

    def lookup_model_names(self) -> Tuple[str, ...]:
        """
        Model names in the object name, outermost first.

        Example:
            "user[addresses_attributes][0]" -> ("user", "addresses")
        """
        names = _MODEL_NAME_PATTERN.findall(self.object_name)
        if self.child_index is not None:
            names = [name for name in names if name != str(self.child_index)]
        return tuple(name.replace(CONSTANTS.NESTED_ATTRIBUTES_SUFFIX, "") for name in names)

    def lookup_action(self) -> Optional[str]:
        """Action name with create/update mapped to new/edit."""
        if not self.action_name:
            return None
        action = str(self.action_name)
        return ACTIONS.get(action, action)

    def find_input(
        self,
        attribute_name: str,
        options: Dict[str, Any],
        block: Optional[Callable[[], Any]] = None,
    ) -> InputBase:
        """Build the input for an attribute; a block wins over the mapping table."""
        column = self.column_for(attribute_name)
        input_type = self.default_input_type(attribute_name, options, column)
        descriptor = FieldDescriptor(attribute_name, input_type, column, options)
        if block is not None:
            return BlockInput(self, descriptor, block)
        input_class: Type[InputBase] = self.mapping_resolver.resolve(input_type)
        return input_class(self, descriptor)

    def find_wrapper(self, input_type: str, options: Dict[str, Any]) -> WrapperDefinition:
        return self.wrapper_resolver.resolve(
            input_type,
            options.get("wrapper"),
            self.wrapper_mappings,
            self.config.wrapper_mappings,
            self.wrapper,
        )

    def default_input_type(self, attribute_name: str, options: Dict[str, Any], column: Optional[AttributeMetadata]) -> str:
        return self.type_resolver.resolve(attribute_name, options, column, self.capabilities)

    def column_for(self, attribute_name: str) -> Optional[AttributeMetadata]:
        """Column metadata for an attribute the bound model declares."""
        if self.bound_model is None or not self.bound_model.has_attribute(attribute_name):
            return None
        return self.bound_model.type_for_attribute(attribute_name)

    # ==================== MODEL STATE (used by inputs) ====================

    @property
    def capabilities(self):
        return self.bound_model.capabilities if self.bound_model is not None else frozenset()

    @property
    def validated(self) -> bool:
        return self.bound_model is not None and self.bound_model.validated

    def is_required(self, attribute_name: str) -> Optional[bool]:
        if self.bound_model is None:
            return None
        return self.bound_model.is_required(attribute_name)

    def errors_for(self, attribute_name: str, reflection: Optional[AssociationReflection] = None) -> List[str]:
        """Errors on the attribute, plus errors on the association it stores."""
        if self.bound_model is None:
            return []
        errors = list(self.bound_model.errors_on(attribute_name))
        if reflection is not None:
            errors.extend(self.bound_model.errors_on(reflection.name))
        return errors

    def read_attribute(self, attribute_name: str) -> Any:
        if self.bound_model is None:
            return None
        return self.bound_model.read_attribute(attribute_name)

    def human_attribute_name(self, attribute_name: str) -> str:
        if self.bound_model is None:
            return inflection.humanize(attribute_name)
        return self.bound_model.human_attribute_name(attribute_name)

    def field_id(self, attribute_name: str) -> str:
        """Control id: "user_email", "user_address_attributes_city"."""
        if not self.object_name:
            return attribute_name
        prefix = _ID_SANITIZE_PATTERN.sub("_", self.object_name).rstrip("_")
        return f"{prefix}_{attribute_name}"

    def field_name(self, attribute_name: str, multiple: bool = False) -> str:
        """Control name: "user[email]", or "user[tag_ids][]" for multiple values."""
        name = f"{self.object_name}[{attribute_name}]" if self.object_name else attribute_name
        return f"{name}[]" if multiple else name

    def __repr__(self) -> str:
        return f"FieldRenderer({self.object_name!r}, wrapper={self.wrapper.name!r})"
