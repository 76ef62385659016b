from __future__ import annotations

import pickle

import pytest

from oauth_registry.models.settings import ClientSettings, TokenSettings


def test_default_settings_are_empty() -> None:
    assert dict(ClientSettings().settings) == {}
    assert dict(TokenSettings.builder().build().settings) == {}


def test_builder_stores_settings() -> None:
    settings = (
        TokenSettings.builder()
        .setting("access-token-time-to-live", 300)
        .setting("reuse-refresh-tokens", False)
        .build()
    )
    assert settings.get_setting("access-token-time-to-live") == 300
    assert settings.get_setting("reuse-refresh-tokens") is False
    assert settings.get_setting("missing") is None
    assert settings.get_setting("missing", "fallback") == "fallback"


def test_builder_settings_callback_edits_live_dict() -> None:
    settings = (
        ClientSettings.builder()
        .setting("a", 1)
        .setting("b", 2)
        .settings(lambda s: s.pop("a"))
        .settings(lambda s: s.update(c=3))
        .build()
    )
    assert dict(settings.settings) == {"b": 2, "c": 3}


def test_builder_rejects_empty_name() -> None:
    with pytest.raises(ValueError, match="name cannot be empty"):
        ClientSettings.builder().setting("", 1)


def test_with_settings_deep_copies_source() -> None:
    source = {"nested": {"values": [1, 2]}}
    settings = ClientSettings.with_settings(source).build()
    source["nested"]["values"].append(3)
    assert settings.get_setting("nested") == {"values": [1, 2]}


def test_with_settings_from_existing_instance_is_independent() -> None:
    original = TokenSettings.builder().setting("audiences", ["api"]).build()
    copy = TokenSettings.with_settings(original.settings).build()
    copy.get_setting("audiences").append("admin")
    assert original.get_setting("audiences") == ["api"]


def test_get_setting_returns_a_copy() -> None:
    settings = TokenSettings.builder().setting("audiences", ["api"]).build()
    before = hash(settings)
    settings.get_setting("audiences").append("admin")
    assert settings.get_setting("audiences") == ["api"]
    assert hash(settings) == before


def test_to_dict_is_detached() -> None:
    settings = ClientSettings.builder().setting("nested", {"values": [1]}).build()
    exported = settings.to_dict()
    assert exported == {"nested": {"values": [1]}}
    exported["nested"]["values"].append(2)
    exported["extra"] = True
    assert dict(settings.settings) == {"nested": {"values": [1]}}


def test_settings_view_is_read_only() -> None:
    settings = ClientSettings.builder().setting("a", 1).build()
    with pytest.raises(TypeError):
        settings.settings["a"] = 2  # type: ignore[index]


def test_equality_is_by_content() -> None:
    a = ClientSettings.builder().setting("x", [1, {"y": {2, 3}}]).build()
    b = ClientSettings.with_settings({"x": [1, {"y": {3, 2}}]}).build()
    assert a == b
    assert hash(a) == hash(b)


def test_client_and_token_settings_are_not_equal() -> None:
    assert ClientSettings() != TokenSettings()


def test_different_contents_are_not_equal() -> None:
    a = ClientSettings.builder().setting("x", 1).build()
    b = ClientSettings.builder().setting("x", 2).build()
    assert a != b


def test_settings_with_unhashable_values_are_hashable() -> None:
    settings = TokenSettings.builder().setting("claims", {"roles": ["admin"]}).build()
    assert isinstance(hash(settings), int)


def test_pickle_round_trip() -> None:
    settings = TokenSettings.builder().setting("ttl", 300).build()
    assert pickle.loads(pickle.dumps(settings)) == settings


def test_repr_lists_settings() -> None:
    settings = ClientSettings.builder().setting("require-proof-key", True).build()
    assert repr(settings) == "ClientSettings(settings={'require-proof-key': True})"
