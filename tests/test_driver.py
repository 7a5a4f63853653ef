"""Tests for the file and stream drivers."""

from __future__ import annotations

from collections.abc import AsyncIterator

import pytest

from gradle_to_json.exceptions import GradleToJsonError, ScriptReadError
from gradle_to_json.parser import VariableTable, parse_file, parse_stream, read_script

APP_SCRIPT = """\
dependencies {
    implementation "com.squareup.okhttp3:okhttp:$okhttpVersion"
    implementation "org.jetbrains.kotlin:kotlin-stdlib:$kotlinVersion"
}
ext {
    okhttpVersion = "3.12.0"
}
"""

ROOT_SCRIPT = """\
buildscript {
    ext.kotlinVersion = '1.3.72'
}
"""


async def _chunks(*parts):
    for part in parts:
        yield part


class TestParseFile:
    @pytest.mark.asyncio
    async def test_second_pass_resolves_later_declarations(self, write_script):
        path = write_script("app/build.gradle", APP_SCRIPT)
        result = await parse_file(path)
        assert result["dependencies"]["implementation"] == [
            "com.squareup.okhttp3:okhttp:3.12.0",
            "org.jetbrains.kotlin:kotlin-stdlib:$kotlinVersion",
        ]
        assert result["ext"] == {"okhttpVersion": "3.12.0"}

    @pytest.mark.asyncio
    async def test_root_scripts_seed_variables(self, write_script):
        root = write_script("build.gradle", ROOT_SCRIPT)
        path = write_script("app/build.gradle", APP_SCRIPT)
        result = await parse_file(str(path), [str(root)])
        assert result["dependencies"]["implementation"][1] == (
            "org.jetbrains.kotlin:kotlin-stdlib:1.3.72"
        )
        assert "buildscript" not in result

    @pytest.mark.asyncio
    async def test_variables_outlive_the_run(self, write_script):
        path = write_script("build.gradle", APP_SCRIPT)
        variables = VariableTable({"kotlinVersion": "1.4.0"})
        result = await parse_file(path, variables=variables)
        assert result["dependencies"]["implementation"][1].endswith(":1.4.0")
        assert variables.get("okhttpVersion") == "3.12.0"

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        with pytest.raises(ScriptReadError) as exc_info:
            await parse_file(tmp_path / "missing.gradle")
        assert "missing.gradle" in str(exc_info.value)
        assert isinstance(exc_info.value.cause, OSError)

    @pytest.mark.asyncio
    async def test_missing_root_file(self, write_script, tmp_path):
        path = write_script("build.gradle", APP_SCRIPT)
        with pytest.raises(GradleToJsonError):
            await parse_file(path, [tmp_path / "nope.gradle"])

    @pytest.mark.asyncio
    async def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "build.gradle"
        path.write_bytes(b"a = \xff\xfe\n")
        with pytest.raises(ScriptReadError):
            await parse_file(path)


class TestReadScript:
    @pytest.mark.asyncio
    async def test_reads_text(self, write_script):
        path = write_script("build.gradle", "a = 1\n")
        assert await read_script(path) == "a = 1\n"


class TestParseStream:
    @pytest.mark.asyncio
    async def test_text_chunks(self):
        result = await parse_stream(_chunks("android {", " a = 1 }"))
        assert result == {"android": {"a": "1"}}

    @pytest.mark.asyncio
    async def test_multibyte_split_across_chunks(self):
        data = 'name = "café"\n'.encode("utf-8")
        split = data.index(b"\xc3") + 1
        result = await parse_stream(_chunks(data[:split], data[split:]))
        assert result == {"name": "café"}

    @pytest.mark.asyncio
    async def test_shared_variables(self):
        variables = VariableTable({"v": "2.0"})
        result = await parse_stream(
            _chunks('dependencies {\n    api "lib:$v"\n}\n'),
            variables,
        )
        assert result == {"dependencies": {"api": "lib:2.0"}}

    @pytest.mark.asyncio
    async def test_read_failure(self):
        async def broken() -> AsyncIterator[bytes]:
            yield b"a = 1\n"
            raise OSError("connection reset")

        with pytest.raises(ScriptReadError) as exc_info:
            await parse_stream(broken(), name="remote.gradle")
        assert exc_info.value.path == "remote.gradle"

    @pytest.mark.asyncio
    async def test_truncated_multibyte(self):
        with pytest.raises(ScriptReadError):
            await parse_stream(_chunks(b"a = \xc3"))
