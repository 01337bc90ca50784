"""Tests for action registration, hooks registration and settings."""

import pytest
from pydantic import ValidationError

from bouncer import ActionOptions, Bouncer, DuplicateActionError, Settings
from bouncer.services.authorizer import ActionsAuthorizer

pytestmark = pytest.mark.unit


class TestDefine:
    """Defining actions on the bouncer."""

    def test_define_is_fluent(self):
        bouncer = Bouncer()
        returned = bouncer.define("a", lambda user: True).define("b", lambda user: False)

        assert returned is bouncer
        assert list(bouncer.actions) == ["a", "b"]

    def test_define_stores_options(self):
        bouncer = Bouncer()
        bouncer.define("view", lambda user: True, allow_guest=True)
        bouncer.define("list", lambda user: True, ActionOptions(allow_guest=True))
        bouncer.define("edit", lambda user: True)

        assert bouncer.actions["view"].options.allow_guest is True
        assert bouncer.actions["list"].options.allow_guest is True
        assert bouncer.actions["edit"].options == ActionOptions()

    def test_redefining_an_action_fails(self):
        first = lambda user: True  # noqa: E731
        bouncer = Bouncer().define("edit-post", first)

        with pytest.raises(DuplicateActionError) as exc_info:
            bouncer.define("edit-post", lambda user: False)

        assert exc_info.value.action == "edit-post"
        assert exc_info.value.error_code == "E_DUPLICATE_ACTION"
        assert bouncer.actions["edit-post"].handler is first

    def test_actions_view_is_read_only(self):
        bouncer = Bouncer().define("a", lambda user: True)

        with pytest.raises(TypeError):
            bouncer.actions["b"] = bouncer.actions["a"]

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_invalid_action_name(self, name):
        with pytest.raises(ValueError):
            Bouncer().define(name, lambda user: True)

    def test_handler_must_be_callable(self):
        with pytest.raises(TypeError):
            Bouncer().define("a", "not callable")


class TestHooksAndPolicies:
    """Hook and policy registration."""

    def test_hooks_keep_registration_order(self):
        first, second = (lambda *a: None), (lambda *a: None)
        bouncer = Bouncer().before(first).before(second).after(second).after(first)

        assert bouncer.hooks.before == [first, second]
        assert bouncer.hooks.after == [second, first]

    def test_hooks_must_be_callable(self):
        with pytest.raises(TypeError):
            Bouncer().before(None)
        with pytest.raises(TypeError):
            Bouncer().after("nope")

    def test_register_policies_replaces_previous_set(self):
        bouncer = Bouncer().register_policies({"post": "support:PostPolicy"})
        bouncer.register_policies({"comment": "support:PostPolicy"})

        assert "comment" in bouncer.policies
        assert "post" not in bouncer.policies
        assert bouncer.policies.names == ["comment"]


class TestForUser:
    """Authorizers are bound to one user."""

    def test_for_user_returns_new_authorizers(self, author, stranger):
        bouncer = Bouncer()
        authorizer = bouncer.for_user(author)
        other = authorizer.for_user(stranger)

        assert isinstance(authorizer, ActionsAuthorizer)
        assert authorizer.user is author
        assert other.user is stranger
        assert other is not authorizer
        assert other.bouncer is bouncer

    def test_user_is_read_only(self, author, stranger):
        authorizer = Bouncer().for_user(author)
        with pytest.raises(AttributeError):
            authorizer.user = stranger


class TestSettings:
    """Settings validation and environment overrides."""

    def test_defaults(self):
        settings = Settings()
        assert settings.DEFAULT_DENY_STATUS == 403
        assert settings.DEFAULT_DENY_MESSAGE.startswith("E_AUTHORIZATION_FAILURE")
        assert settings.LOG_DECISIONS is False

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("BOUNCER_DEFAULT_DENY_STATUS", "404")
        monkeypatch.setenv("BOUNCER_LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.DEFAULT_DENY_STATUS == 404
        assert settings.LOG_LEVEL == "DEBUG"

    @pytest.mark.parametrize("status", [200, 302, 600])
    def test_deny_status_must_be_an_error(self, status):
        with pytest.raises(ValidationError):
            Settings(DEFAULT_DENY_STATUS=status)

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(LOG_LEVEL="CHATTY")
