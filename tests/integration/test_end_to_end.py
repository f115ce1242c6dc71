"""
api-check — integration tests across the public entrypoints

File: tests/integration/test_end_to_end.py

Purpose
- Exercise a user-defined schema module through the library and the command line.

What this test file should cover
- Nested shapes, unions, and conditional properties composed in one schema.
- Config discovered from disk decorating ``ApiCheck`` messages.
- ``python -m api_check``-style entrypoint against a document on disk.
"""

from __future__ import annotations

import importlib
import json
import logging
import textwrap
from typing import TYPE_CHECKING

import pytest

from api_check import ApiCheck, ApiCheckError, checkers, is_failure, load_config
from api_check.main import ExitCode, cli_entrypoint

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

SCHEMA_MODULE = textwrap.dedent(
    """
    from api_check import checkers

    address = checkers.shape({"street": checkers.string, "zip": checkers.string.optional})

    user = checkers.shape(
        {
            "name": checkers.string,
            "age": checkers.number.optional,
            "tags": checkers.type_or_array_of(checkers.string).optional,
            "address": address.strict.optional,
            "email": checkers.shape.if_not("phone", checkers.string),
            "phone": checkers.shape.if_not("email", checkers.string),
            "nickname_style": checkers.shape.only_if(
                "nickname", checkers.one_of(["short", "long"])
            ).optional,
            "nickname": checkers.string.optional,
        }
    ).strict
    """
)

USER_CHECKER = checkers.shape(
    {
        "name": checkers.string,
        "roles": checkers.array_of(checkers.one_of(["admin", "viewer"])),
        "limits": checkers.object_of(checkers.number).optional,
        "contact": checkers.one_of_type(
            [checkers.string, checkers.shape({"email": checkers.string})]
        ),
    }
)


@pytest.fixture
def schema_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[str]:
    module_name = f"user_schema_{tmp_path.name.replace('-', '_')}"
    (tmp_path / f"{module_name}.py").write_text(SCHEMA_MODULE, encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("NO_COLOR", "1")
    yield module_name
    logger = logging.getLogger("api_check")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.mark.integration
def test_composed_schema_accepts_and_rejects_documents() -> None:
    good = {
        "name": "ada",
        "roles": ["admin"],
        "limits": {"requests": 10},
        "contact": {"email": "ada@example.invalid"},
    }

    assert USER_CHECKER(good, "user") is None
    assert USER_CHECKER({**good, "contact": "ada@example.invalid"}) is None

    bad_role = USER_CHECKER({**good, "roles": ["root"]}, "user")
    assert bad_role is not None
    assert bad_role.message == "`roles` at `user` must be `arrayOf[enum[admin, viewer]]`"

    bad_limits = USER_CHECKER({**good, "limits": {"requests": "many"}}, "user")
    assert bad_limits is not None
    assert bad_limits.message == "`limits` at `user` must be `objectOf[Number]`"

    bad_contact = USER_CHECKER({**good, "contact": 5}, "user")
    assert bad_contact is not None
    assert bad_contact.message.endswith('must be `oneOf[String, shape({"email":"String"})]`')


@pytest.mark.integration
def test_guard_uses_config_loaded_from_disk(tmp_path: Path) -> None:
    (tmp_path / "api_check.toml").write_text(
        '[output]\nprefix = "billing:"\ndocs_base_url = "https://example.invalid/billing"\n',
        encoding="utf-8",
    )
    api_check = ApiCheck(load_config(environ={}, search_dir=tmp_path))

    @api_check.guard(checkers.number, checkers.shape({"currency": checkers.string}).optional)
    def charge(amount: object, options: object = None) -> object:
        return amount

    assert charge(10) == 10
    assert charge(10, {"currency": "EUR"}) == 10
    with pytest.raises(ApiCheckError) as exc_info:
        charge("10")

    message = str(exc_info.value)
    assert message.startswith("billing: `value` at `Argument 1` must be `Number`")
    assert "https://example.invalid/billing" in message
    assert '"str"' in message


@pytest.mark.integration
def test_disabled_by_environment(tmp_path: Path) -> None:
    config = load_config(environ={"API_CHECK_DISABLED": "1"}, search_dir=tmp_path)

    assert ApiCheck(config).validate([checkers.number], ["not a number"]).passed


@pytest.mark.integration
def test_cli_validates_documents_with_user_schema(
    schema_module: str, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    valid = tmp_path / "valid.yaml"
    valid.write_text(
        "name: ada\ntags: [math, engines]\nemail: ada@example.invalid\n", encoding="utf-8"
    )
    both_contacts = tmp_path / "both.json"
    both_contacts.write_text(
        json.dumps({"name": "ada", "email": "a@example.invalid", "phone": "555"}),
        encoding="utf-8",
    )
    extra = tmp_path / "extra.yaml"
    extra.write_text("name: ada\nphone: '555'\nrole: admin\n", encoding="utf-8")
    style_without_nickname = tmp_path / "style.yaml"
    style_without_nickname.write_text(
        "name: ada\nphone: '555'\nnickname_style: short\n", encoding="utf-8"
    )

    checker = f"{schema_module}:user"

    assert cli_entrypoint(["validate", "--checker", checker, str(valid)]) == ExitCode.SUCCESS
    capsys.readouterr()

    code = cli_entrypoint(
        ["validate", "--checker", checker, "--name", "user", "--json", str(both_contacts)]
    )
    payload = json.loads(capsys.readouterr().out)
    assert code == ExitCode.VALIDATION_FAILED
    assert payload["message"] == "`email` at `user` must be `specified only if phone is not specified`"

    code = cli_entrypoint(["validate", "--checker", checker, "--json", str(extra)])
    payload = json.loads(capsys.readouterr().out)
    assert code == ExitCode.VALIDATION_FAILED
    assert "cannot have extra properties: `role`" in payload["message"]

    code = cli_entrypoint(["validate", "--checker", checker, "--json", str(style_without_nickname)])
    payload = json.loads(capsys.readouterr().out)
    assert code == ExitCode.VALIDATION_FAILED
    assert payload["message"].endswith("must be `specified only if nickname is also specified`")


@pytest.mark.integration
def test_only_if_passes_when_sibling_present(schema_module: str) -> None:
    user = importlib.import_module(schema_module).user
    document = {"name": "ada", "phone": "555", "nickname": "A", "nickname_style": "short"}

    assert user(document) is None
    assert is_failure(user({**document, "nickname_style": "medium"}))
