import pytest

from modlevels import LOG_LEVELS, parse


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("trace", {"default": "trace"}),
        ("info", {"default": "info"}),
        ("silent", {"default": "silent"}),
        ("TRACE", {"default": "trace"}),
        ("Fatal", {"default": "fatal"}),
        ("bla", {"default": "warn"}),
        ("SOMETHING", {"default": "warn"}),
        ("bla=====sdfsdf,,,sdfjas=sdhy23", {"default": "warn"}),
        ("module1=trace", {"default": "warn", "module1": "trace"}),
        ("module2=debug,module3=info", {"default": "warn", "module2": "debug", "module3": "info"}),
        (
            "module1=debug,module2=trace,default=info",
            {"default": "info", "module1": "debug", "module2": "trace"},
        ),
        (
            "module7=info,module8=blablabla,module9=trace,module10=warn",
            {"default": "warn", "module7": "info", "module8": "warn", "module9": "trace", "module10": "warn"},
        ),
        ("module1=DEBUG,Module1=error", {"default": "warn", "module1": "debug", "Module1": "error"}),
        ("default=info", {"default": "info"}),
        ("default=info,debug,trace", {"default": "warn"}),
        ("default=info,default=error", {"default": "error"}),
        ("default=info,default=blabla", {"default": "warn"}),
        ("module1=info,module21= blabla", {"default": "warn", "module1": "info", "module21": "warn"}),
        ("module1=info,=,module21==blabla", {"default": "warn"}),
        ("info,default=warn,moduleX=bla", {"default": "warn"}),
    ],
)
def test_parse(raw, expected):
    assert parse(raw).as_dict() == expected


def test_value_with_equals_sign_is_not_a_module_map():
    assert parse("module1=info=debug").as_dict() == {"default": "warn"}
    assert parse("module1=info,module2=debug=x").as_dict() == {"default": "warn"}


@pytest.mark.parametrize(
    "raw",
    ["", ",", ",,,", "=", "==", "a=", "=info", "módulo=info", "module.sub=info", "info\n", "\n", "日本語", "a=b,"],
)
def test_parse_never_fails_and_keeps_default(raw):
    level_map = parse(raw)
    assert "default" in level_map
    assert level_map.get("default") in LOG_LEVELS


def test_trailing_newline_is_part_of_the_value():
    assert parse("module1=info\n").as_dict() == {"default": "warn", "module1": "warn"}


def test_none_is_read_as_empty_string():
    assert parse(None).as_dict() == {"default": "warn"}


@pytest.mark.parametrize("level", LOG_LEVELS)
def test_bare_level_casing(level):
    alternating = "".join(c.upper() if i % 2 else c for i, c in enumerate(level))
    for variant in (level, level.upper(), level.capitalize(), alternating):
        assert parse(variant).get("default") == level


def test_unknown_modules_use_default():
    level_map = parse("default=error,db=trace")
    assert level_map.get("db") == "trace"
    assert level_map.get("http") == level_map.get("default") == "error"
    assert level_map.get("DB") == "error"


def test_each_parse_is_independent():
    first = parse("module1=debug")
    second = parse("module2=trace")
    assert "module2" not in first
    assert "module1" not in second
