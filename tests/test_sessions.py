"""Tests for per-session state."""

from deckinsight.services.sessions import SessionRegistry


class TestSessionRegistry:
    def test_creates_on_first_use(self) -> None:
        registry = SessionRegistry()

        state = registry.get("abc")

        assert "abc" in registry
        assert len(registry) == 1
        assert state.engine.history == ()

    def test_same_id_returns_same_state(self) -> None:
        registry = SessionRegistry()

        assert registry.get("abc") is registry.get("abc")

    def test_sessions_are_isolated(self) -> None:
        """History added in one session never shows up in another."""
        registry = SessionRegistry()
        registry.get("first").engine.add_to_history({"commander": "Atraxa"})

        assert registry.get("second").engine.history == ()
        assert registry.get("first").engine is not registry.get("second").engine
        assert registry.get("first").knowledge is not registry.get("second").knowledge

    def test_drop(self) -> None:
        registry = SessionRegistry()
        registry.get("abc").engine.add_to_history({"commander": "Atraxa"})

        assert registry.drop("abc")
        assert "abc" not in registry
        assert registry.get("abc").engine.history == ()

    def test_drop_unknown(self) -> None:
        assert not SessionRegistry().drop("missing")
