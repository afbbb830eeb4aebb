"""Tests for short-circuiting blocks and exit_adapter."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any

import pytest

from fallthrough.foundation.errors import EffectTypeError, ErrorCode, ExitError
from fallthrough.monads import (
    Absent,
    AsyncEffect,
    Effect,
    Exit,
    Failure,
    Present,
    Success,
    async_block,
    block,
    either_bind,
    either_map,
    exit_adapter,
    maybe_bind,
)
from fallthrough.runtime.observability import CollectingRenderer


class Recorder:
    """Collects the steps a block actually executed."""

    def __init__(self) -> None:
        self.steps: list[str] = []

    def step(self, name: str, value: Any = None) -> Effect[Any]:
        def run() -> Any:
            self.steps.append(name)
            return value if value is not None else name
        return Effect(run)


# ═════════════════════════════════════════════════════════════════════════════
# exit_adapter
# ═════════════════════════════════════════════════════════════════════════════


class TestExitAdapter:
    @pytest.mark.parametrize("ignored", [None, "payload", 0, object()])
    def test_runs_effect_once_then_terminates_once(self, ignored: Any) -> None:
        terminated: list[Any] = []
        effect_runs: list[str] = []

        def terminate(value: Any) -> Effect[Any]:
            terminated.append(value)
            return Effect.pure("after terminate")

        handler = exit_adapter(terminate, Effect(lambda: effect_runs.append("ran") or "result"))
        produced = handler(ignored)
        assert effect_runs == []
        assert terminated == []

        produced.run()
        assert effect_runs == ["ran"]
        assert terminated == ["result"]

    def test_usable_as_zero_argument_thunk(self) -> None:
        terminated: list[Any] = []
        handler = exit_adapter(lambda v: Effect(lambda: terminated.append(v)), Effect.pure(7))
        handler().run()
        assert terminated == [7]

    def test_rejects_non_effect(self) -> None:
        with pytest.raises(EffectTypeError):
            exit_adapter(lambda v: Effect.pure(v), "not an effect")  # type: ignore[arg-type]


# ═════════════════════════════════════════════════════════════════════════════
# block
# ═════════════════════════════════════════════════════════════════════════════


class TestBlock:
    def test_early_exit_skips_rest_of_block(self) -> None:
        rec = Recorder()

        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            value = yield either_bind(
                rec.step("action", Failure("x")),
                exit_adapter(exit.terminate, rec.step("log_and_default", "default")),
            )
            yield rec.step("after")
            return f"finished with {value}"

        assert program().run() == "default"
        assert rec.steps == ["action", "log_and_default"]

    def test_success_path_continues(self) -> None:
        rec = Recorder()

        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            value = yield either_bind(Effect.pure(Success("ok")), exit.adapt(rec.step("fallback")))
            present = yield maybe_bind(Effect.pure(Present(2)), exit.adapt(rec.step("fallback")))
            yield rec.step("after")
            return f"{value}-{present}"

        assert program().run() == "ok-2"
        assert rec.steps == ["after"]

    def test_maybe_bind_with_adapter_exits_on_absent(self) -> None:
        rec = Recorder()

        @block
        def program(exit: Exit[int]) -> Generator[Effect[Any], Any, int]:
            yield maybe_bind(Effect.pure(Absent()), exit.adapt(Effect.pure(-1)))
            yield rec.step("after")
            return 0

        assert program().run() == -1
        assert rec.steps == []

    def test_block_is_deferred_and_rerunnable(self) -> None:
        rec = Recorder()

        @block
        def program(exit: Exit[str], name: str) -> Generator[Effect[Any], Any, str]:
            greeting = yield rec.step("greet", f"hi {name}")
            return greeting

        eff = program("ann")
        assert rec.steps == []
        assert eff.run() == "hi ann"
        assert eff.run() == "hi ann"
        assert rec.steps == ["greet", "greet"]

    def test_plain_body_returning_effect(self) -> None:
        @block
        def program(exit: Exit[str]) -> Effect[str]:
            return either_bind(Effect.pure(Failure("e")), exit.adapt(Effect.pure("stopped"))).map(str.upper)

        assert program().run() == "stopped"

    def test_plain_body_running_effects_directly(self) -> None:
        rec = Recorder()

        @block
        def program(exit: Exit[str]) -> str:
            exit.terminate("early").run()
            rec.step("after").run()
            return "late"

        assert program().run() == "early"
        assert rec.steps == []

    def test_generator_finally_runs_on_exit(self) -> None:
        cleaned: list[str] = []

        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            try:
                yield exit.terminate("bye")
                return "never"
            finally:
                cleaned.append("cleanup")

        assert program().run() == "bye"
        assert cleaned == ["cleanup"]

    def test_finally_may_yield_cleanup_effects_during_exit(self) -> None:
        released: list[str] = []

        def release() -> None:
            released.append("lock")

        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            try:
                yield either_map(Failure("x"), lambda e: exit.terminate("stopped"))
                return "never"
            finally:
                yield Effect(release)

        assert program().run() == "stopped"
        assert released == ["lock"]

    def test_exit_wins_even_if_body_swallows_it(self) -> None:
        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            try:
                yield exit.terminate("bye")
            except BaseException:
                pass
            return "swallowed"

        assert program().run() == "bye"

    def test_except_exception_does_not_catch_exit(self) -> None:
        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            try:
                yield exit.terminate("bye")
            except Exception:
                return "swallowed"
            return "never"

        assert program().run() == "bye"

    def test_effect_errors_are_thrown_into_body(self) -> None:
        def boom() -> int:
            raise ValueError("boom")

        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            try:
                yield Effect(boom)
            except ValueError as exc:
                return f"handled {exc}"
            return "never"

        assert program().run() == "handled boom"

    def test_unhandled_effect_errors_propagate(self) -> None:
        @block
        def program(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            yield Effect(lambda: {}["missing"])
            return "never"

        with pytest.raises(KeyError):
            program().run()

    def test_yielding_a_non_effect_raises_in_body(self) -> None:
        @block
        def program(exit: Exit[str]) -> Generator[Any, Any, str]:
            yield 42
            return "never"

        with pytest.raises(EffectTypeError):
            program().run()

    def test_nested_blocks_exit_to_their_owner(self) -> None:
        rec = Recorder()

        @block
        def outer(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            @block
            def inner(inner_exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
                yield exit.terminate("outer stopped")
                return "inner finished"

            yield inner()
            yield rec.step("outer after inner")
            return "outer finished"

        @block
        def sibling(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            @block
            def inner(inner_exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
                yield inner_exit.terminate("inner stopped")
                return "inner finished"

            value = yield inner()
            yield rec.step("sibling after inner")
            return value

        assert outer().run() == "outer stopped"
        assert sibling().run() == "inner stopped"
        assert rec.steps == ["sibling after inner"]

    def test_terminate_after_block_finished_raises(self) -> None:
        leaked: list[Exit[str]] = []

        @block
        def program(exit: Exit[str]) -> str:
            leaked.append(exit)
            return "done"

        assert program().run() == "done"
        exit = leaked[0]
        assert not exit.active
        with pytest.raises(ExitError) as info:
            exit.terminate("late").run()
        assert info.value.code is ErrorCode.EXIT_OUTSIDE_BLOCK

    def test_early_exit_is_traced(self, tracing: CollectingRenderer) -> None:
        @block
        def stopping(exit: Exit[str]) -> Generator[Effect[Any], Any, str]:
            yield exit.terminate("secret value")
            return "never"

        stopping().run()
        exits = [e for e in tracing.entries if e.event == "block exited early"]
        assert len(exits) == 1
        assert exits[0].context["block"].endswith("stopping")
        assert "secret value" not in repr(exits[0].context)


# ═════════════════════════════════════════════════════════════════════════════
# async_block
# ═════════════════════════════════════════════════════════════════════════════


class TestAsyncBlock:
    @pytest.mark.asyncio
    async def test_early_exit_skips_rest_of_block(self) -> None:
        steps: list[str] = []

        @async_block
        async def program(exit: Exit[str]) -> str:
            await either_bind(AsyncEffect.pure(Failure("x")), exit.adapt(AsyncEffect.pure("default")))
            steps.append("after")
            return "finished"

        assert await program() == "default"
        assert steps == []

    @pytest.mark.asyncio
    async def test_success_path_continues(self) -> None:
        @async_block
        async def program(exit: Exit[str], key: str) -> str:
            value = await maybe_bind(AsyncEffect.pure(Present(key)), exit.adapt(AsyncEffect.pure("missing")))
            return f"found {value}"

        assert await program("k") == "found k"

    @pytest.mark.asyncio
    async def test_terminate_uses_async_context(self) -> None:
        @async_block
        async def program(exit: Exit[int]) -> int:
            assert isinstance(exit.terminate(1), AsyncEffect)
            await exit.terminate(1)
            return 2

        assert await program() == 1

    @pytest.mark.asyncio
    async def test_plain_body_returning_async_effect(self) -> None:
        @async_block
        def program(exit: Exit[str]) -> AsyncEffect[str]:
            return maybe_bind(AsyncEffect.pure(Absent()), exit.adapt(AsyncEffect.pure("stopped")))

        assert await program() == "stopped"

    @pytest.mark.asyncio
    async def test_finally_may_await_cleanup_during_exit(self) -> None:
        released: list[str] = []

        @async_block
        async def program(exit: Exit[str]) -> str:
            try:
                await exit.terminate("stopped")
                return "never"
            finally:
                await AsyncEffect.from_effect(Effect(lambda: released.append("lock")))

        assert await program() == "stopped"
        assert released == ["lock"]

    @pytest.mark.asyncio
    async def test_exceptions_propagate(self) -> None:
        @async_block
        async def program(exit: Exit[str]) -> str:
            raise RuntimeError("broken")

        with pytest.raises(RuntimeError, match="broken"):
            await program()
