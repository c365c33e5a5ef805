"""Unit tests for taskview.tasks.loader — retrieval and the tri-state boundary."""

import json

import httpx
import pytest

from taskview.engine.config import TaskViewConfig
from taskview.engine.errors import (
    TaskPayloadError,
    TaskResponseError,
    TaskTransportError,
)
from taskview.engine.logging import init_logging
from taskview.tasks.loader import FETCH_FAILED_MESSAGE, LoadResult, LoadStatus, TaskLoader

BASE_URL = "http://tasks.test"


def _loader(handler) -> TaskLoader:
    return TaskLoader(BASE_URL, transport=httpx.MockTransport(handler))


class TestLoadResult:
    def test_pending(self):
        result = LoadResult.pending()
        assert result.status is LoadStatus.PENDING
        assert result.is_pending
        assert result.tasks == ()
        assert result.error is None

    def test_ready(self, tasks):
        result = LoadResult.ready(tasks)
        assert result.is_ready
        assert list(result.tasks) == tasks

    def test_failed(self):
        result = LoadResult.failed("boom")
        assert result.is_failed
        assert result.error == "boom"
        assert result.tasks == ()


class TestFetch:
    @pytest.mark.asyncio
    async def test_success(self, json_handler, task_rows):
        handler = json_handler(task_rows)
        tasks = await _loader(handler).fetch()
        assert [t.id for t in tasks] == [r["id"] for r in task_rows]
        assert tasks[0].due_date == task_rows[0]["dueDate"]

    @pytest.mark.asyncio
    async def test_single_get_without_query(self, json_handler):
        handler = json_handler([])
        await _loader(handler).fetch()
        assert len(handler.requests) == 1
        request = handler.requests[0]
        assert request.method == "GET"
        assert str(request.url) == f"{BASE_URL}/api/tasks"
        assert request.url.query == b""

    @pytest.mark.asyncio
    async def test_server_error(self, json_handler):
        with pytest.raises(TaskResponseError) as exc_info:
            await _loader(json_handler({"detail": "boom"}, status=500)).fetch()
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == FETCH_FAILED_MESSAGE
        assert exc_info.value.url == f"{BASE_URL}/api/tasks"

    @pytest.mark.asyncio
    async def test_not_found(self, json_handler):
        with pytest.raises(TaskResponseError):
            await _loader(json_handler([], status=404)).fetch()

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(TaskTransportError, match="Connection refused"):
            await _loader(refuse).fetch()

    @pytest.mark.asyncio
    async def test_timeout(self):
        def slow(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(TaskTransportError):
            await _loader(slow).fetch()

    @pytest.mark.asyncio
    async def test_body_not_json(self):
        handler = lambda request: httpx.Response(200, content=b"<html>oops</html>")
        with pytest.raises(TaskPayloadError, match="not JSON"):
            await _loader(handler).fetch()

    @pytest.mark.asyncio
    async def test_body_not_array(self, json_handler):
        with pytest.raises(TaskPayloadError) as exc_info:
            await _loader(json_handler({"tasks": []})).fetch()
        assert exc_info.value.url == f"{BASE_URL}/api/tasks"


class TestLoad:
    @pytest.mark.asyncio
    async def test_ready(self, json_handler, task_rows):
        result = await _loader(json_handler(task_rows)).load()
        assert result.is_ready
        assert len(result.tasks) == 8
        assert result.error is None

    @pytest.mark.asyncio
    async def test_empty_collection_is_ready_not_failed(self, json_handler):
        result = await _loader(json_handler([])).load()
        assert result.is_ready
        assert result.tasks == ()
        assert result.error is None

    @pytest.mark.asyncio
    async def test_http_500_fails_with_message(self, json_handler):
        result = await _loader(json_handler({}, status=500)).load()
        assert result.is_failed
        assert result.error == "Failed to fetch tasks"
        assert result.tasks == ()

    @pytest.mark.asyncio
    async def test_transport_failure_does_not_raise(self):
        def refuse(request):
            raise httpx.ConnectError("Connection refused", request=request)

        result = await _loader(refuse).load()
        assert result.is_failed
        assert "Connection refused" in result.error

    @pytest.mark.asyncio
    async def test_redirect_loop_does_not_raise(self):
        def loop(request):
            return httpx.Response(302, headers={"Location": str(request.url)})

        result = await _loader(loop).load()
        assert result.is_failed
        assert result.error.startswith("Network error while fetching tasks")

    @pytest.mark.asyncio
    async def test_undecodable_body_does_not_raise(self):
        def bad_gzip(request):
            return httpx.Response(
                200,
                headers={"Content-Type": "application/json", "Content-Encoding": "gzip"},
                stream=httpx.ByteStream(b"[1, 2, 3]"),
            )

        result = await _loader(bad_gzip).load()
        assert result.is_failed
        assert result.error.startswith("Network error while fetching tasks")

    @pytest.mark.asyncio
    async def test_bad_payload_does_not_raise(self, json_handler):
        result = await _loader(json_handler([{"id": 1}])).load()
        assert result.is_failed
        assert "index 0" in result.error

    @pytest.mark.asyncio
    async def test_no_automatic_retry(self, json_handler):
        handler = json_handler({}, status=503)
        await _loader(handler).load()
        assert len(handler.requests) == 1

    @pytest.mark.asyncio
    async def test_each_load_is_one_call(self, json_handler):
        handler = json_handler([])
        loader = _loader(handler)
        await loader.load()
        await loader.load()
        assert len(handler.requests) == 2

    @pytest.mark.asyncio
    async def test_writes_structured_log(self, json_handler, task_rows, tmp_path, log_entries):
        init_logging(log_dir=str(tmp_path / "logs"))
        await _loader(json_handler(task_rows)).load()
        await _loader(json_handler({}, status=500)).load()

        entries = log_entries(tmp_path / "logs", "loader", "execution")
        assert [e["event"] for e in entries] == ["tasks_fetched", "tasks_fetch_failed"]
        assert entries[0]["task_count"] == 8
        assert entries[1]["status_code"] == 500


class TestFromConfig:
    def test_uses_api_settings(self):
        config = TaskViewConfig(api={"base_url": "http://example.com/", "tasks_path": "/v2/tasks"})
        loader = TaskLoader.from_config(config)
        assert loader.url == "http://example.com/v2/tasks"
