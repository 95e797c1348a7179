import re
import pytest
from hub_scanner.patterns import (
    HIGH_RISK_PATTERNS, SECRET_PATTERNS, TEXT_EXTENSIONS, compile_patterns, file_extension, is_text_file,
)
@pytest.mark.parametrize("name,expected", [
    ("README.md", ".md"),
    ("src/app.PY", ".py"),
    ("archive.tar.gz", ".gz"),
    (".env", ".env"),
    ("Makefile", ""),
    ("dir.d/noext", ""),
])
def test_file_extension(name, expected):
    assert file_extension(name) == expected
@pytest.mark.parametrize("name", ["config.json", "nested/train.ipynb", "keys.PEM", ".env.local", "x.docker-compose.yml"])
def test_text_files_accepted(name):
    assert is_text_file(name)
@pytest.mark.parametrize("name", ["model.safetensors", "binary.png", "weights.bin", "Makefile", ""])
def test_binary_files_rejected(name):
    assert not is_text_file(name)
def test_every_pattern_compiles():
    compiled = compile_patterns(SECRET_PATTERNS)
    assert len(compiled) == len(SECRET_PATTERNS) == 40
    assert all(isinstance(regex, re.Pattern) for _, regex in compiled)
def test_compilation_is_memoized():
    first = compile_patterns(SECRET_PATTERNS)
    second = compile_patterns(SECRET_PATTERNS)
    assert all(a[1] is b[1] for a, b in zip(first, second))
def test_pattern_names_unique_and_high_risk_known():
    names = [p.name for p in SECRET_PATTERNS]
    assert len(names) == len(set(names))
    assert HIGH_RISK_PATTERNS <= set(names)
def test_extensions_are_lowercase_with_dot():
    assert all(ext.startswith(".") and ext == ext.lower() for ext in TEXT_EXTENSIONS)
def test_character_classes_are_ascii_only():
    regex = dict((p.name, r) for p, r in compile_patterns(SECRET_PATTERNS))["MySQL URI"]
    line = "mysql://user:pw@db/app\u00a0tail"
    assert regex.search(line).group(0) == line
    assert regex.flags & re.ASCII
