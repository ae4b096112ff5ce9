"""
Pytest configuration and fixtures for enumslices tests.

Provides reusable fixtures for:
- Parsing Go source into a SourceFile
- Writing throwaway Go packages to disk
- Running the generator for one type and checking the result
"""

import pytest
from pathlib import Path

from enumslices.compiler.loader import load_package
from enumslices.compiler.pipeline import GenerateOptions, generate_type
from enumslices.internals.parser import parse_to_ast
from enumslices.internals.report import Reporter


@pytest.fixture
def parse_go():
    """
    Fixture that returns a function parsing Go source to a SourceFile.

    Usage:
        sf = parse_go("package p\\nconst A = 1\\n")
        assert sf.package == "p"
    """
    def _parse(source: str):
        ast, _ = parse_to_ast(source, filename="test.go")
        return ast

    return _parse


@pytest.fixture
def go_package(tmp_path):
    """
    Fixture that writes Go files into a fresh directory and returns it.

    Usage:
        pkg_dir = go_package({"a.go": "package p\\n..."})
        pkg_dir = go_package("type Day int\\n...")  # single file, package test
    """
    def _write(files, package: str = "test") -> Path:
        if isinstance(files, str):
            files = {"input.go": f"package {package}\n" + files}
        for name, text in files.items():
            (tmp_path / name).write_text(text, encoding="utf-8")
        return tmp_path

    return _write


@pytest.fixture
def generate(go_package):
    """
    Fixture that generates one type from Go source.

    Usage:
        ctx = generate(source, "Day")
        assert ctx.succeeded
        print(ctx.fragment)
    """
    def _generate(source, type_name: str, **options):
        pkg_dir = go_package(source)
        reporter = Reporter()
        package = load_package([str(pkg_dir)], reporter)
        assert package is not None, f"Loading failed:\n{reporter.format(use_color=False, use_unicode=False)}"
        opts = GenerateOptions(type_names=[type_name], **options)
        return generate_type(type_name, package, opts)

    return _generate


@pytest.fixture
def expect_values(generate):
    """
    Fixture that generates a type and asserts its keys and names.

    Usage:
        expect_values(source, "Day", [(0, "Monday"), (1, "Tuesday")])
    """
    def _expect(source, type_name: str, expected, **options):
        ctx = generate(source, type_name, **options)
        diagnostics = ctx.reporter.format(use_color=False, use_unicode=False)
        assert ctx.succeeded, f"Generation failed:\n{diagnostics}"
        blob = ctx.artifact.blob.encode("utf-8")
        got = [
            (key, blob[start:end].decode("utf-8"))
            for key, (start, end) in zip(ctx.artifact.key_sequence, ctx.artifact.val_sequence)
        ]
        assert got == expected, f"Table mismatch:\nExpected: {expected!r}\nGot: {got!r}"
        return ctx

    return _expect


@pytest.fixture
def expect_error(generate):
    """
    Fixture that verifies generation of a type fails with an error code.

    Usage:
        expect_error(bad_source, "Day", "CE0104")
    """
    def _expect(source, type_name: str, code: str, message_substring: str = None):
        ctx = generate(source, type_name)
        assert not ctx.succeeded, f"Expected generation to fail but got:\n{ctx.fragment}"
        codes = [d.code for d in ctx.reporter.items]
        assert code in codes, f"Expected {code}, got {codes}"
        if message_substring:
            messages = " ".join(d.message for d in ctx.reporter.items)
            assert message_substring in messages, \
                f"Expected message containing '{message_substring}' but got:\n{messages}"
        return ctx

    return _expect
