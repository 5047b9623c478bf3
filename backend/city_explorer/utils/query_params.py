"""クエリパラメータ `data` のデコード

ブラウザのクライアントはネストしたオブジェクトをブラケット形式
(``data[latitude]=47.6&data[longitude]=-122.3``) か JSON 文字列
(``data={"latitude": 47.6, "longitude": -122.3}``) で送ってくる。どちらも dict にする。
"""
import json
import re
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError
from starlette.datastructures import QueryParams

from ..errors import InvalidQuery

ModelT = TypeVar("ModelT", bound=BaseModel)

_BRACKET_KEY = re.compile(r"^(?P<name>[^\[\]]+)\[(?P<field>[^\[\]]+)\]$")


def read_text(params: QueryParams, name: str = "data") -> str:
    value = params.get(name)
    if value is None or not value.strip():
        raise InvalidQuery(f"Query parameter '{name}' is required")
    return value


def read_object(params: QueryParams, name: str = "data") -> Dict[str, Any]:
    raw = params.get(name)
    if raw is not None:
        try:
            decoded = json.loads(raw)
        except ValueError:
            raise InvalidQuery(f"Query parameter '{name}' must be an object")
        if not isinstance(decoded, dict):
            raise InvalidQuery(f"Query parameter '{name}' must be an object")
        return decoded

    fields = {}
    for key, value in params.multi_items():
        match = _BRACKET_KEY.match(key)
        if match and match.group("name") == name:
            fields[match.group("field")] = value
    if not fields:
        raise InvalidQuery(f"Query parameter '{name}' is required")
    return fields


def read_model(params: QueryParams, model: Type[ModelT], name: str = "data") -> ModelT:
    try:
        return model(**read_object(params, name))
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise InvalidQuery(f"Query parameter '{name}' is invalid: {missing}")
