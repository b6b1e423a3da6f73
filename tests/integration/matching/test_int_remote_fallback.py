# tests/integration/matching/test_int_remote_fallback.py
"""Remote fallback behavior of MatchingEngine."""

from __future__ import annotations

import asyncio
import time

import httpx
import pytest

import answerfinder.matching.engine as engine_module
from answerfinder.core.errors import ErrorKind, RemoteTimeoutError
from answerfinder.core.models import PipelineOptions, RemoteResponse
from answerfinder.matching.engine import MSG_NO_MATCH, MSG_REMOTE_DISABLED
from answerfinder.remote.http_remote import HttpRemoteGenerator
from answerfinder.storage.memory_store import InMemoryDocumentStore

REMOTE_ON = PipelineOptions(remote_enabled=True)
UNMATCHED = "Completely unrelated astronomy topic"


class TestRemoteFallback:
    @pytest.mark.asyncio
    async def test_remote_answer(self, engine_factory, fake_remote):
        engine = await engine_factory(remote=fake_remote)
        result = await engine.find_answer(UNMATCHED, REMOTE_ON)

        assert result.success
        assert result.tier == 5
        assert result.match.match_type == "remote"
        assert result.match.document is None
        assert result.answer == "Generated answer"
        assert result.match.reasoning == "Because"
        assert result.match.confidence == pytest.approx(0.7)

        request = fake_remote.generate.await_args.args[0]
        assert request.question == UNMATCHED
        assert len(request.candidates) == 5
        assert [kw.word for kw in request.keywords]

    @pytest.mark.asyncio
    async def test_remote_not_called_on_local_hit(self, engine_factory, fake_remote):
        engine = await engine_factory(remote=fake_remote)
        result = await engine.find_answer("what is the capital of france", REMOTE_ON)
        assert result.tier == 1
        fake_remote.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remote_disabled_per_call(self, engine_factory, fake_remote):
        engine = await engine_factory(remote=fake_remote)
        result = await engine.find_answer(UNMATCHED, PipelineOptions(remote_enabled=False))
        assert not result.success
        assert result.message == MSG_REMOTE_DISABLED
        fake_remote.generate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_remote_with_empty_store(self, engine_factory, fake_remote):
        engine = await engine_factory(documents=[], remote=fake_remote)
        result = await engine.find_answer(UNMATCHED, REMOTE_ON)
        assert result.tier == 5

    @pytest.mark.asyncio
    async def test_remote_without_answer(self, engine_factory, fake_remote):
        fake_remote.generate.return_value = RemoteResponse(success=False)
        engine = await engine_factory(remote=fake_remote)
        result = await engine.find_answer(UNMATCHED, REMOTE_ON)
        assert not result.success
        assert result.message == MSG_NO_MATCH
        assert result.error is None

    @pytest.mark.asyncio
    async def test_remote_failure_reported(self, engine_factory, fake_remote):
        fake_remote.generate.side_effect = RemoteTimeoutError("slow")
        engine = await engine_factory(remote=fake_remote)
        result = await engine.find_answer(UNMATCHED, REMOTE_ON)

        assert not result.success
        assert result.tier == 0
        assert result.error.kind == ErrorKind.REMOTE_TIMEOUT
        assert result.message.startswith(MSG_NO_MATCH)
        assert "timed out" in result.message

    @pytest.mark.asyncio
    async def test_per_call_endpoint(self, engine_factory, fake_remote, monkeypatch):
        created = []

        def factory(settings, endpoint=None):
            created.append(endpoint)
            return fake_remote

        monkeypatch.setattr(engine_module, "create_remote_generator", factory)
        engine = await engine_factory()
        options = PipelineOptions(remote_enabled=True, remote_endpoint="http://other.test")

        await engine.find_answer(UNMATCHED, options)
        await engine.find_answer(UNMATCHED + " again", options)
        await engine.aclose()

        assert created == ["http://other.test"]
        assert fake_remote.generate.await_count == 2
        assert fake_remote.closed


    @pytest.mark.asyncio
    async def test_unexpected_remote_error_degrades(self, engine_factory, fake_remote):
        fake_remote.generate.side_effect = RuntimeError("boom")
        engine = await engine_factory(remote=fake_remote)
        result = await engine.find_answer(UNMATCHED, REMOTE_ON)

        assert not result.success
        assert result.tier == 0
        assert result.error.kind == ErrorKind.UNKNOWN
        assert result.message.startswith(MSG_NO_MATCH)
        assert "unexpected error" in result.message

    @pytest.mark.asyncio
    async def test_malformed_per_call_endpoint_degrades(self, engine_factory):
        engine = await engine_factory()
        options = PipelineOptions(remote_enabled=True, remote_endpoint="http://a\x00b/")

        result = await engine.find_answer(UNMATCHED, options)
        await engine.aclose()

        assert not result.success
        assert result.error.kind == ErrorKind.REMOTE_UPSTREAM_ERROR
        assert "returned an error" in result.message


class TestRemoteDeadline:
    @pytest.mark.asyncio
    async def test_slow_remote_does_not_stall_other_queries(
        self, engine_factory, make_fake_remote,
    ):
        async def stall(request):
            await asyncio.sleep(5)

        slow_remote = make_fake_remote()
        slow_remote.generate.side_effect = stall
        fast_remote = make_fake_remote()
        slow_engine = await engine_factory(remote=slow_remote)
        fast_engine = await engine_factory(remote=fast_remote)
        options = PipelineOptions(remote_enabled=True, remote_timeout_s=0.5)
        finished = {}

        async def timed(name, engine):
            result = await engine.find_answer(UNMATCHED, options)
            finished[name] = time.perf_counter()
            return result

        t0 = time.perf_counter()
        slow, fast = await asyncio.gather(timed("slow", slow_engine), timed("fast", fast_engine))

        assert fast.success
        assert fast.tier == 5
        assert finished["fast"] - t0 < 0.5
        assert not slow.success
        assert slow.error.kind == ErrorKind.REMOTE_TIMEOUT
        assert slow.error.details == {"timeout_s": 0.5}
        assert finished["fast"] < finished["slow"] < t0 + 5

    @pytest.mark.asyncio
    async def test_deadline_defaults_to_settings(self, fake_remote, settings):
        async def stall(request):
            await asyncio.sleep(5)

        fake_remote.generate.side_effect = stall
        fast_settings = settings.model_copy(
            update={"remote_timeout_seconds": 0.1, "remote_deadline_seconds": 0.2}
        )
        engine = engine_module.MatchingEngine(
            InMemoryDocumentStore(), remote=fake_remote, settings=fast_settings,
        )

        result = await engine.find_answer(UNMATCHED, PipelineOptions(remote_enabled=True))

        assert result.error.kind == ErrorKind.REMOTE_TIMEOUT
        assert result.error.details == {"timeout_s": 0.2}


class TestHttpRemoteEndToEnd:
    @pytest.mark.asyncio
    async def test_engine_over_http(self, engine_factory):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json=[{"generated_text": "Answer: Jupiter\nReasoning: Largest planet"}]
            )

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        remote = HttpRemoteGenerator("http://remote.test", client=client, default_confidence=0.7)
        engine = await engine_factory(remote=remote)

        result = await engine.find_answer("Which planet is the largest in the solar system?", REMOTE_ON)

        assert result.success
        assert result.tier == 5
        assert result.answer == "Jupiter"
        assert result.match.reasoning == "Largest planet"
        await client.aclose()
