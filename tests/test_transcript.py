from pathlib import Path

from session_usage.data.models import UsageSnapshot
from session_usage.data.transcript import (
    find_transcript,
    latest_usage,
    prompt_tokens_for_session,
    read_latest_usage,
    snapshot_from_usage,
)


class TestLatestUsage:
    def test_last_usage_line_wins(self):
        lines = [
            '{"usage": {"input": 10, "output": 1}}',
            '{"type": "note"}',
            '{"usage": {"input": 99, "output": 7}}',
        ]
        assert latest_usage(lines) == UsageSnapshot(input=99, output=7)

    def test_nested_message_usage(self):
        lines = ['{"message": {"role": "assistant", "usage": {"input": 5, "cacheRead": 40}}}']
        assert latest_usage(lines).prompt_tokens == 45

    def test_skips_blank_malformed_and_non_object_lines(self):
        lines = [
            '{"usage": {"input": 3}}',
            "",
            "   ",
            "{broken",
            "[1, 2]",
            '"text"',
            '{"usage": "not an object"}',
        ]
        assert latest_usage(lines) == UsageSnapshot(input=3)

    def test_no_usage(self):
        assert latest_usage(['{"type": "session"}']) is None
        assert latest_usage([]) is None

    def test_empty_usage_object_still_replaces(self):
        lines = ['{"usage": {"input": 50}}', '{"usage": {}}']
        assert latest_usage(lines) == UsageSnapshot()


class TestSnapshotFromUsage:
    def test_snake_case_and_string_numbers(self):
        snapshot = snapshot_from_usage({
            "input": "12",
            "output": 3.0,
            "cache_read": 100,
            "cache_write": "8",
            "total_tokens": 200,
        })
        assert snapshot == UsageSnapshot(input=12, output=3, cache_read=100, cache_write=8, total_tokens=200)

    def test_camel_case_preferred_over_snake_case(self):
        snapshot = snapshot_from_usage({"cacheRead": 1, "cache_read": 2, "totalTokens": 9, "total": 4})
        assert snapshot.cache_read == 1
        assert snapshot.total_tokens == 9

    def test_plain_total_key(self):
        assert snapshot_from_usage({"output": 20, "total": 120}).prompt_tokens == 100

    def test_unparseable_numbers_are_zero(self):
        snapshot = snapshot_from_usage({"input": "n/a", "output": None, "cacheRead": True})
        assert snapshot == UsageSnapshot()


class TestFindTranscript:
    def test_store_directory_first(self, tmp_path, home, write_transcript):
        store_dir = tmp_path / "store"
        local = write_transcript(store_dir, "sess-1", [{"usage": {"input": 1}}])
        write_transcript(Path.home() / ".pi" / "agent" / "sessions", "sess-1", [{"usage": {"input": 2}}])
        assert find_transcript("sess-1", store_dir) == local

    def test_user_directories_in_order(self, tmp_path, write_transcript):
        pi = write_transcript(Path.home() / ".pi" / "agent" / "sessions", "s", [])
        write_transcript(Path.home() / ".tau" / "agent" / "sessions" / "clawdis", "s", [])
        assert find_transcript("s", tmp_path / "store") == pi

    def test_tau_directory(self, tmp_path, write_transcript):
        tau = write_transcript(Path.home() / ".tau" / "agent" / "sessions" / "clawdis", "s", [])
        assert find_transcript("s", tmp_path / "store") == tau

    def test_session_id_is_trimmed(self, tmp_path, write_transcript):
        path = write_transcript(tmp_path, "abc", [])
        assert find_transcript("  abc\n", tmp_path) == path

    def test_blank_session_id(self, tmp_path):
        assert find_transcript("   ", tmp_path) is None

    def test_explicit_search_dirs(self, tmp_path, write_transcript):
        path = write_transcript(tmp_path / "logs", "abc", [])
        assert find_transcript("abc", tmp_path / "store", search_dirs=[tmp_path / "logs"]) == path
        assert find_transcript("abc", tmp_path / "store", search_dirs=[]) is None

    def test_overlong_session_id(self, tmp_path):
        assert find_transcript("x" * 300, tmp_path, search_dirs=[]) is None


class TestPromptTokensForSession:
    def test_prompt_from_last_usage(self, tmp_path, write_transcript):
        write_transcript(tmp_path, "sess", [
            {"message": {"usage": {"input": 100, "output": 10}}},
            {"message": {"usage": {"input": 10, "cacheRead": 5000, "cacheWrite": 200, "output": 40}}},
        ])
        assert prompt_tokens_for_session("sess", tmp_path) == 5210

    def test_missing_transcript(self, tmp_path):
        assert prompt_tokens_for_session("nope", tmp_path) is None

    def test_no_session_id(self, tmp_path):
        assert prompt_tokens_for_session(None, tmp_path) is None
        assert prompt_tokens_for_session("", tmp_path) is None

    def test_undecodable_transcript(self, tmp_path):
        (tmp_path / "bad.jsonl").write_bytes(b"\xff\xfe\x00garbage")
        assert read_latest_usage(tmp_path / "bad.jsonl") is None
        assert prompt_tokens_for_session("bad", tmp_path) is None
