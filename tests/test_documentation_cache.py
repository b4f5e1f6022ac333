from __future__ import annotations

from conftest import ScriptedRunner

from qtri.services.command_runner import CommandResult
from qtri.services.documentation_cache import (
    CHOICE_INDENT,
    DEFAULT_CAPACITY,
    DocumentationCache,
    failure_message,
    not_found_message,
    reflow_multiple_choices,
)


class TestDocumentationCache:
    def test_hit_does_not_rerun_the_command(self) -> None:
        runner = ScriptedRunner({"Array": "Array < Object\n"})
        cache = DocumentationCache(runner)
        assert cache.fetch("Array") == "Array < Object\n"
        assert cache.fetch("Array") == "Array < Object\n"
        assert runner.calls == ["Array"]
        assert "Array" in cache

    def test_oldest_topic_is_evicted_past_capacity(self) -> None:
        runner = ScriptedRunner()
        cache = DocumentationCache(runner)
        names = [f"Topic{i}" for i in range(DEFAULT_CAPACITY + 1)]
        for name in names:
            cache.fetch(name)
        assert len(cache) == DEFAULT_CAPACITY
        assert names[0] not in cache
        assert cache.topics() == names[1:]

    def test_hits_do_not_refresh_eviction_order(self) -> None:
        runner = ScriptedRunner()
        cache = DocumentationCache(runner, capacity=2)
        cache.fetch("A")
        cache.fetch("B")
        cache.fetch("A")
        cache.fetch("C")
        assert cache.topics() == ["B", "C"]

    def test_failures_are_never_cached(self) -> None:
        runner = ScriptedRunner({"Array": "sh: qri: not found\n"}, exit_code=127)
        cache = DocumentationCache(runner, settings_path="/home/me/.qtrirc")
        first = cache.fetch("Array")
        second = cache.fetch("Array")
        assert runner.calls == ["Array", "Array"]
        assert "Array" not in cache
        assert first == second
        assert first.startswith("sh: qri: not found\n\nERROR: Failed to run the command")
        assert "(exit code: 127)" in first
        assert "/home/me/.qtrirc" in first

    def test_nil_output_becomes_not_found(self) -> None:
        runner = ScriptedRunner({"Nope": "nil\n"})
        cache = DocumentationCache(runner)
        assert cache.fetch("Nope") == 'Topic "Nope" not found.'
        assert "Nope" in cache

    def test_multiple_choices_are_reflowed(self) -> None:
        runner = ScriptedRunner({"new": "Multiple choices:\n\n  Array::new, Hash::new\n"})
        cache = DocumentationCache(runner)
        text = cache.fetch("new")
        assert text == reflow_multiple_choices("Multiple choices:\n\n  Array::new, Hash::new\n")
        assert f"\n{CHOICE_INDENT}Array::new\n{CHOICE_INDENT}Hash::new" in text


class TestMessages:
    def test_not_found_message(self) -> None:
        assert not_found_message("Foo") == 'Topic "Foo" not found.'

    def test_failure_message_mentions_command(self) -> None:
        result = CommandResult('qri -f ansi "Foo"', "", 2)
        message = failure_message(result)
        assert message.startswith("ERROR: Failed to run the command 'qri -f ansi \"Foo\"' (exit code: 2).")
        assert "qtri --dump-rc" in message

    def test_reflow_multiple_choices(self) -> None:
        assert reflow_multiple_choices("Multiple choices:\n  a, b") == (
            f"Multiple choices:\n{CHOICE_INDENT}a\n{CHOICE_INDENT}b"
        )
