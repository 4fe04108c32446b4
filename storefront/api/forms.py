"""
Request body parsing for the product endpoints.

The admin UI posts products as multipart forms with bracketed field names
(``category[0]``, ``variants[1][price]``) plus repeated ``images`` file parts;
scripts post plain JSON. Both end up as the same nested dict.
"""
import json
import logging
import re
from typing import Any, Dict, List, Tuple, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import UploadFile

from storefront.api.responses import format_validation_errors, validation_message
from storefront.exceptions import BadRequestError, ValidationError
from storefront.services.product_service import ImageFile

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")
# Fields the UI may send as a JSON-encoded string instead of bracketed parts
JSON_FIELDS = ("category", "notes", "variants", "existingImages")

_KEY_PATTERN = re.compile(r"^([^\[\]]+)((?:\[[^\[\]]*\])*)$")
_PART_PATTERN = re.compile(r"\[([^\[\]]*)\]")

ModelT = TypeVar("ModelT", bound=BaseModel)


def split_key(key: str) -> List[str]:
    """``variants[0][size]`` -> ``["variants", "0", "size"]``"""
    match = _KEY_PATTERN.match(key)
    if not match:
        return [key]
    return [match.group(1)] + _PART_PATTERN.findall(match.group(2))


def _assign(target: Dict[str, Any], parts: List[str], value: Any) -> None:
    for part in parts[:-1]:
        target = target.setdefault(part, {})
        if not isinstance(target, dict):
            raise BadRequestError(f"Conflicting form field: {'.'.join(parts)}")
    last = parts[-1]
    if last == "":
        last = str(len(target))
    target[last] = value


def _listify(value: Any) -> Any:
    """Turn dicts keyed 0..n into lists, recursively"""
    if not isinstance(value, dict):
        return value
    converted = {k: _listify(v) for k, v in value.items()}
    if converted and all(k.isdigit() for k in converted):
        return [converted[k] for k in sorted(converted, key=int)]
    return converted


def nest_fields(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    nested: Dict[str, Any] = {}
    for key, value in pairs:
        _assign(nested, split_key(key), value)
    return {k: _listify(v) for k, v in nested.items()}


def decode_json_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    for field in JSON_FIELDS:
        value = data.get(field)
        if isinstance(value, str) and value.strip().startswith(("[", "{")):
            try:
                data[field] = json.loads(value)
            except json.JSONDecodeError:
                raise BadRequestError(f"Invalid JSON in field '{field}'")
    return data


async def parse_product_request(request: Request) -> Tuple[Dict[str, Any], List[ImageFile]]:
    """Product fields and uploaded image files from a multipart or JSON body"""
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        fields = []
        files: List[ImageFile] = []
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if value.filename:
                    files.append((value.filename, await value.read(), value.content_type))
            else:
                fields.append((key, value))
        data = decode_json_fields(nest_fields(fields))
        logger.info(f"Parsed product form: {len(fields)} fields, {len(files)} files")
        return data, files

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise BadRequestError("Request body must be JSON or multipart form data")
    if not isinstance(body, dict):
        raise BadRequestError("Request body must be a JSON object")
    return decode_json_fields(body), []


def validate_payload(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """Validate parsed fields, raising the app's 400 on failure"""
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        details = format_validation_errors(e.errors())
        raise ValidationError(validation_message(details), details=details)
