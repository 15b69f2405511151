"""Tests for predicate building and combination."""

import pytest
from sqlalchemy import true

from devsync.models import Answer, Comment, Note, Question, Tag, User, Workspace
from devsync.search.errors import InvalidValueError
from devsync.search.predicates import build_predicate, combine
from devsync.search.registry import lookup
from devsync.search.terms import Term


def predicate(entity_type, model, field, value):
    return build_predicate(Term(field, value), lookup(entity_type, field), model)


def sql(clause) -> str:
    return str(clause.compile())


def test_text_partial_is_case_insensitive_like():
    compiled = sql(predicate("user", User, "name", "ali"))
    assert "lower(" in compiled
    assert "LIKE" in compiled


def test_text_partial_escapes_wildcards():
    clause = predicate("user", User, "name", "100%")
    compiled = clause.compile()
    assert "ESCAPE" in str(compiled)
    assert "/%" in list(compiled.params.values())[0]


def test_enum_accepts_any_case():
    for value in ("admin", "ADMIN", "Admin"):
        compiled = sql(predicate("user", User, "role", value))
        assert "role" in compiled


def test_enum_rejects_unknown_member():
    with pytest.raises(InvalidValueError) as exc:
        predicate("user", User, "role", "superuser")
    message = str(exc.value)
    assert "'role'" in message
    assert "'ADMIN'" in message and "'MEMBER'" in message


def test_comment_target_type_rejects_unknown_member():
    with pytest.raises(InvalidValueError, match="targetType"):
        predicate("comment", Comment, "targetType", "post")


@pytest.mark.parametrize("value", ["true", "TRUE", "False", "false"])
def test_boolean_accepts_literals(value):
    assert "IS" in sql(predicate("workspace", Workspace, "isPrivate", value))


@pytest.mark.parametrize("value", ["yes", "1", "t", "nope"])
def test_boolean_rejects_other_values(value):
    with pytest.raises(InvalidValueError, match="'true' or 'false'"):
        predicate("answer", Answer, "isAccepted", value)


def test_integer_exact_coerces_value():
    clause = predicate("note", Note, "version", "3")
    assert 3 in clause.compile().params.values()


def test_integer_exact_rejects_non_numeric():
    with pytest.raises(InvalidValueError, match="an integer"):
        predicate("note", Note, "version", "three")


def test_to_one_relation_uses_exists():
    compiled = sql(predicate("workspace", Workspace, "ownerName", "ali"))
    assert "EXISTS" in compiled


def test_to_many_relation_uses_exists():
    compiled = sql(predicate("question", Question, "tagsName", "python"))
    assert "EXISTS" in compiled
    assert "LIKE" not in compiled


def test_combine_without_predicates_matches_everything():
    assert combine([]).compare(true())


def test_combine_ors_predicates():
    clause = combine(
        [predicate("user", User, "name", "alice"), predicate("user", User, "role", "admin")]
    )
    assert " OR " in sql(clause)


@pytest.mark.parametrize("value", ["0_5", "+5", " 5", "5.0", "1e3", "٥"])
def test_integer_exact_accepts_ascii_digits_only(value):
    with pytest.raises(InvalidValueError, match="an integer"):
        predicate("tag", Tag, "amountUsed", value)


def test_integer_exact_accepts_negative_values():
    clause = predicate("tag", Tag, "amountUsed", "-2")
    assert -2 in clause.compile().params.values()


@pytest.mark.parametrize("value", ["99999999999999999999", "-9223372036854775809"])
def test_integer_exact_rejects_values_outside_64_bits(value):
    with pytest.raises(InvalidValueError, match="64-bit integer"):
        predicate("note", Note, "version", value)


def test_integer_exact_accepts_64_bit_bounds():
    clause = predicate("note", Note, "version", "9223372036854775807")
    assert 2**63 - 1 in clause.compile().params.values()
