"""
SQL fragment builders shared by the CRUD modules.

Both builders return SQL text with named bind parameters plus the values to
bind, so nothing supplied by a caller is ever interpolated into a statement.
"""

from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from app.core.exceptions import InvalidInputError

WHERE_OPERATORS = {"=", "<", "<=", ">", ">=", "LIKE"}

LIKE_ESCAPE = "\\"


class PartialUpdate(NamedTuple):
    set_cols: str
    values: List[Any]

    @property
    def params(self) -> Dict[str, Any]:
        """Bind parameters keyed by placeholder name (p1, p2, ...)."""
        return {f"p{idx}": value for idx, value in enumerate(self.values, start=1)}


class WhereClause(NamedTuple):
    sql: str
    params: Dict[str, Any]


def sql_for_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Optional[Mapping[str, str]] = None,
) -> PartialUpdate:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        data_to_update: Field name -> new value, only for fields being changed
        js_to_sql: Field name -> column name; missing fields use their own name

    Returns:
        PartialUpdate whose set_cols reads '"first_name"=:p1, "age"=:p2'
        and whose values line up with the placeholders.

    Raises:
        InvalidInputError: If there is nothing to update
    """
    keys = list(data_to_update)
    if not keys:
        raise InvalidInputError("No data")

    js_to_sql = js_to_sql or {}
    cols = [
        f'"{js_to_sql.get(key, key)}"=:p{idx}'
        for idx, key in enumerate(keys, start=1)
    ]

    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


def like_contains(value: str) -> str:
    """
    LIKE pattern matching value anywhere, with value taken literally.

    Backslash, % and _ in value are escaped with LIKE_ESCAPE, which
    sql_for_where declares on every LIKE it emits.
    """
    for char in (LIKE_ESCAPE, "%", "_"):
        value = value.replace(char, LIKE_ESCAPE + char)
    return f"%{value}%"


def sql_for_where(conditions: Sequence[Tuple[str, str, Any]]) -> WhereClause:
    """
    AND together (expression, operator, value) conditions.

    Expressions and operators come from the calling module, never from the
    request; values are always bound. An empty list gives an empty clause.
    LIKE conditions carry ESCAPE '\\'; build their values with like_contains.

    Raises:
        ValueError: If an operator is not in WHERE_OPERATORS. Operators are
            fixed in code, so this only signals a programming error and never
            reaches a client as a 400.
    """
    parts = []
    params: Dict[str, Any] = {}
    for idx, (expression, operator, value) in enumerate(conditions, start=1):
        if operator not in WHERE_OPERATORS:
            raise ValueError(f"Unsupported operator: {operator}")
        name = f"w{idx}"
        condition = f"{expression} {operator} :{name}"
        if operator == "LIKE":
            condition += f" ESCAPE '{LIKE_ESCAPE}'"
        parts.append(condition)
        params[name] = value

    if not parts:
        return WhereClause(sql="", params={})
    return WhereClause(sql="WHERE " + " AND ".join(parts), params=params)
