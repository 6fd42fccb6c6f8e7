"""Tests for FieldRenderer: full fields, control-only fields and standalone components."""

from dataclasses import dataclass

import pytest

from markup_formgen import inputs
from markup_formgen.core.discovery_cache import get_shared_discovery_cache
from markup_formgen.forms.field_renderer import FieldRenderer
from markup_formgen.forms.wrappers import define_wrapper, unregister_wrapper
from markup_formgen.protocols import DataclassModel, FormGenConfig, set_form_config

from conftest import User


def component_names(fragment):
    return [child.component for child in fragment.children]


@pytest.fixture
def invalid_email_model():
    return DataclassModel(User(email="not-an-email"), errors={"email": ["is invalid"]}, model_name="User")


def test_email_field_end_to_end(invalid_email_model):
    """An email attribute renders label, control, hint and error in that order."""
    renderer = FieldRenderer("user", invalid_email_model)
    field = renderer.render_field("email", {"hint": "We never share it"})

    assert field.component == "wrapper"
    assert field.tag == "div"
    assert component_names(field) == ["label", "input", "hint", "error"]
    assert field.classes == ("input", "email", "required", "field_with_errors")

    label, control, hint, error = field.children
    assert label.content == "Email"
    assert label.attributes["for"] == "user_email"
    assert label.find("required_marker").content == "*"

    assert control.tag == "input"
    assert control.attributes["type"] == "email"
    assert control.attributes["id"] == "user_email"
    assert control.attributes["name"] == "user[email]"
    assert control.attributes["value"] == "not-an-email"
    assert control.attributes["required"] is True
    assert control.attributes["aria-invalid"] is True
    assert control.classes == ("email", "required")

    assert hint.content == "We never share it"
    assert error.content == "is invalid"


def test_defaults_merge_under_call_options(user_model):
    renderer = FieldRenderer(
        "user", user_model,
        defaults={"input_html": {"class": "form-control", "size": 20}, "hint": "Default hint"},
    )
    field = renderer.render_field("name", {"input_html": {"size": 40}})
    control = field.find("input")

    assert control.attributes["size"] == 40
    assert "form-control" in control.classes
    assert field.find("hint").content == "Default hint"
    assert renderer.defaults == {"input_html": {"class": "form-control", "size": 20}, "hint": "Default hint"}


def test_as_option_picks_input(user_model):
    renderer = FieldRenderer("user", user_model)
    field = renderer.render_field("name", {"as": "text"})
    control = field.find("input")

    assert control.tag == "textarea"
    assert control.content == "Carlos"


def test_column_metadata_feeds_decorators(user_model):
    control = FieldRenderer("user", user_model).render_field("name").find("input")
    assert control.attributes["maxlength"] == 100


def test_explicit_maxlength_beats_column_limit(user_model):
    control = FieldRenderer("user", user_model).render_field("name", {"maxlength": 20}).find("input")
    assert control.attributes["maxlength"] == 20


def test_password_value_is_not_rendered():
    model = DataclassModel(User(password="secret"))
    control = FieldRenderer("user", model).render_field("password").find("input")

    assert control.attributes["type"] == "password"
    assert control.attributes["value"] is None


def test_numeric_inputs_step(user_model):
    renderer = FieldRenderer("user", user_model)
    age = renderer.render_field("age").find("input")
    score = renderer.render_field("score").find("input")

    assert age.attributes["type"] == "number"
    assert age.attributes["step"] == 1
    assert age.attributes["value"] == 30
    assert score.attributes["step"] == "any"


def test_file_capability_renders_file_input():
    @dataclass
    class Profile:
        avatar: str = ""

    model = DataclassModel(Profile(), capabilities=["avatar_attachment"])
    control = FieldRenderer("profile", model).render_field("avatar").find("input")
    assert control.attributes["type"] == "file"


def test_block_replaces_control(user_model):
    renderer = FieldRenderer("user", user_model)
    field = renderer.render_field("name", {"hint": "Shown"}, block=lambda: "<custom control>")

    assert component_names(field) == ["label", "input", "hint"]
    assert field.find("input").content == "<custom control>"
    assert field.find("label").content == "Name"


def test_hidden_input_has_no_label_hint_or_error():
    model = DataclassModel(User(name="Carlos"), errors={"name": ["is taken"]})
    field = FieldRenderer("user", model).render_field("name", {"as": "hidden", "hint": "ignored"})

    assert component_names(field) == ["input"]
    assert field.find("input").attributes["type"] == "hidden"
    assert "required" not in field.find("input").attributes


def test_optional_when_model_says_so(user):
    model = DataclassModel(user, required=["email"])
    renderer = FieldRenderer("user", model)

    assert "optional" in renderer.render_field("name").classes
    assert "required" in renderer.render_field("email").classes
    assert renderer.render_field("name", {"required": True}).find("required_marker") is not None


def test_unknown_component_fails_loud(user_model):
    renderer = FieldRenderer("user", user_model)
    input = renderer.find_input("name", {})
    with pytest.raises(TypeError):
        input.render_component("tooltip")


def test_renderer_without_model():
    renderer = FieldRenderer("search")
    field = renderer.render_field("query_url")

    assert field.find("input").attributes["type"] == "url"
    assert field.find("input").attributes["value"] is None
    assert field.find("label").content == "Query url"


def test_cache_discovery_shares_cache(user_model):
    set_form_config(FormGenConfig(cache_discovery=True))
    first = FieldRenderer("user", user_model)
    second = FieldRenderer("user", user_model)

    assert first.mapping_resolver.cache is get_shared_discovery_cache()
    assert second.mapping_resolver.cache is first.mapping_resolver.cache

    first.render_field("email")
    assert get_shared_discovery_cache().get("email") is inputs.StringInput


def test_instance_cache_by_default(user_model):
    first = FieldRenderer("user", user_model)
    second = FieldRenderer("user", user_model)
    assert first.mapping_resolver.cache is not second.mapping_resolver.cache


# ==================== CONTROL ONLY ====================

def test_field_only_renders_just_the_control(invalid_email_model):
    renderer = FieldRenderer("user", invalid_email_model)
    control = renderer.render_field_only("email", {"hint": "ignored", "label": "ignored"})

    assert control.component == "input"
    assert control.tag == "input"
    assert control.find("label") is None
    assert control.find("hint") is None
    assert control.find("error") is None


def test_field_only_keeps_decorators_and_folds_other_options(user_model):
    renderer = FieldRenderer("user", user_model)
    control = renderer.render_field_only(
        "email",
        {"placeholder": "you@example.com", "data-role": "mail", "collection": None, "input_html": {"size": 30}},
    )

    assert control.attributes["placeholder"] == "you@example.com"
    assert control.attributes["data-role"] == "mail"
    assert control.attributes["size"] == 30
    assert control.attributes["required"] is True
    assert "collection" not in control.attributes
    assert "input_html" not in control.attributes


def test_field_only_decorators_follow_the_field_wrapper(user_model):
    define_wrapper("plain", "label", "input")
    try:
        renderer = FieldRenderer("user", user_model, wrapper_mappings={"email": "plain"})
        control = renderer.render_field_only("email", {"placeholder": "you@example.com"})

        # No decorators in the wrapper: the option is copied to the control as is
        assert control.attributes["placeholder"] == "you@example.com"
        assert "aria-required" not in control.attributes
    finally:
        unregister_wrapper("plain")


def test_field_only_error_class(invalid_email_model):
    config = FormGenConfig(input_field_error_class="is-invalid", input_field_valid_class="is-valid")
    control = FieldRenderer("user", invalid_email_model, config=config).render_field_only("email")

    assert "is-invalid" in control.classes
    assert "is-valid" not in control.classes


def test_field_only_valid_class(user):
    config = FormGenConfig(input_field_error_class="is-invalid", input_field_valid_class="is-valid")
    validated = FieldRenderer("user", DataclassModel(user, validated=True), config=config)
    unvalidated = FieldRenderer("user", DataclassModel(user), config=config)

    assert "is-valid" in validated.render_field_only("email").classes
    assert "is-valid" not in unvalidated.render_field_only("email").classes
    assert "is-invalid" not in unvalidated.render_field_only("email").classes


def test_field_only_without_configured_classes(invalid_email_model):
    control = FieldRenderer("user", invalid_email_model).render_field_only("email")
    assert control.classes == ("email", "required")


# ==================== STANDALONE COMPONENTS ====================

def test_standalone_label(user_model):
    renderer = FieldRenderer("user", user_model)

    label = renderer.label("email")
    assert label.content == "Email"
    assert label.find("required_marker") is not None

    custom = renderer.label("email", "Your address", **{"class": "strong"})
    assert custom.content == "Your address"
    assert custom.attributes["for"] == "user_email"
    assert custom.classes == ("strong",)


def test_standalone_hint(user_model):
    renderer = FieldRenderer("user", user_model)

    assert renderer.hint(hint="Free text").content == "Free text"
    assert renderer.hint("email", hint="Used for login", id="email_hint").attributes["id"] == "email_hint"
    assert renderer.hint("email") is None


def test_standalone_errors(invalid_email_model):
    renderer = FieldRenderer("user", invalid_email_model)

    assert renderer.error("email").content == "is invalid"
    assert renderer.error("email", error_prefix="Address").content == "Address is invalid"
    assert renderer.full_error("email").content == "Email is invalid"
    assert renderer.error("name") is None


def test_error_method_to_sentence():
    model = DataclassModel(User(), errors={"email": ["is too short", "is invalid", "is taken"]})
    renderer = FieldRenderer("user", model)

    assert renderer.error("email").content == "is too short"
    assert renderer.error("email", error_method="to_sentence").content == "is too short, is invalid, and is taken"

    two_errors = FieldRenderer("user", DataclassModel(User(), errors={"email": ["is too short", "is invalid"]}))
    assert two_errors.error("email", error_method="to_sentence").content == "is too short and is invalid"


def test_error_notification(invalid_email_model, user_model):
    notification = FieldRenderer("user", invalid_email_model).error_notification()

    assert notification.tag == "p"
    assert notification.classes == ("error_notification",)
    assert notification.content == "Please review the problems below:"
    assert FieldRenderer("user", invalid_email_model).error_notification("Fix it").content == "Fix it"
    assert FieldRenderer("user", user_model).error_notification() is None


def test_submit_button_caption(user):
    new_record = FieldRenderer("user", DataclassModel(user, model_name="User"))
    saved_record = FieldRenderer("user", DataclassModel(user, model_name="User", persisted=True))

    assert new_record.button("submit").attributes["value"] == "Create User"
    assert saved_record.button("submit").attributes["value"] == "Update User"
    assert new_record.button("submit", "Save").attributes["value"] == "Save"


def test_button_class_comes_first(user_model):
    config = FormGenConfig(button_class="btn")
    button = FieldRenderer("user", user_model, config=config).button("button", "Go", **{"class": "primary"})

    assert button.tag == "button"
    assert button.content == "Go"
    assert button.classes == ("btn", "primary")


def test_unknown_button_kind(user_model):
    with pytest.raises(ValueError):
        FieldRenderer("user", user_model).button("image")


# ==================== LOOKUPS ====================

def test_lookup_model_names():
    assert FieldRenderer("user").lookup_model_names() == ("user",)
    assert FieldRenderer("user[addresses_attributes][0]").lookup_model_names() == ("user", "addresses")

    nested = FieldRenderer("user[addresses_attributes][new_address]", child_index="new_address")
    assert nested.lookup_model_names() == ("user", "addresses")


def test_lookup_action():
    assert FieldRenderer("user", action_name="create").lookup_action() == "new"
    assert FieldRenderer("user", action_name="update").lookup_action() == "edit"
    assert FieldRenderer("user", action_name="show").lookup_action() == "show"
    assert FieldRenderer("user").lookup_action() is None


def test_field_ids_and_names():
    renderer = FieldRenderer("user[address_attributes]")

    assert renderer.field_id("city") == "user_address_attributes_city"
    assert renderer.field_name("city") == "user[address_attributes][city]"
    assert renderer.field_name("tag_ids", multiple=True) == "user[address_attributes][tag_ids][]"


# ==================== COLLECTION HELPERS ====================

@dataclass(frozen=True)
class Plan:
    code: str
    title: str


PLANS = [Plan("basic", "Basic"), Plan("pro", "Pro")]


def test_collection_radio_buttons(user_model):
    renderer = FieldRenderer("user", user_model)
    group = renderer.collection_radio_buttons("plan", PLANS, "code", "title", {"checked": "pro"})

    assert group.component == "input"
    assert group.tag is None
    basic, pro = group.children
    radio, label = basic.children
    assert radio.attributes["type"] == "radio"
    assert radio.attributes["value"] == "basic"
    assert radio.attributes["id"] == "user_plan_basic"
    assert radio.attributes["name"] == "user[plan]"
    assert "checked" not in radio.attributes
    assert label.content == "Basic"
    assert label.attributes["for"] == "user_plan_basic"
    assert pro.children[0].attributes["checked"] is True


def test_collection_radio_buttons_with_callables_and_wrappers(user_model):
    renderer = FieldRenderer("user", user_model)
    group = renderer.collection_radio_buttons(
        "accepted", [(True, "Yes"), (False, "No")],
        lambda item: item[0], lambda item: item[1],
        {"collection_wrapper_tag": "ul", "collection_wrapper_class": "choices", "item_wrapper_tag": "li"},
        {"data-kind": "choice"},
    )

    assert group.tag == "ul"
    assert group.classes == ("choices",)
    yes, no = group.children
    assert yes.tag == "li"
    assert yes.children[0].attributes["id"] == "user_accepted_true"
    assert yes.children[0].attributes["data-kind"] == "choice"
    assert [item.children[1].content for item in group.children] == ["Yes", "No"]


def test_collection_check_boxes(user_model):
    renderer = FieldRenderer("user", user_model)
    group = renderer.collection_check_boxes(
        "plan_codes", PLANS, "code", "title", {"checked": ["basic", "pro"], "disabled": "pro"},
    )
    hidden, basic, pro = group.children

    assert hidden.attributes == {"type": "hidden", "name": "user[plan_codes][]", "value": ""}
    assert basic.children[0].attributes["type"] == "checkbox"
    assert basic.children[0].attributes["name"] == "user[plan_codes][]"
    assert basic.children[0].attributes["checked"] is True
    assert "disabled" not in basic.children[0].attributes
    assert pro.children[0].attributes["disabled"] is True


def test_collection_helpers_use_form_input_html_defaults(user_model):
    renderer = FieldRenderer("user", user_model, defaults={"input_html": {"class": "choice"}})
    group = renderer.collection_check_boxes("plan_codes", PLANS, "code", "title")

    assert "choice" in group.children[1].children[0].classes
    assert renderer.defaults == {"input_html": {"class": "choice"}}
