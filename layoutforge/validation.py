"""Lightweight request payload validation utilities.

Provides minimal schema-like checking with clear, consistent error responses
for the generation endpoint and CLI. Not a general JSON Schema implementation.

- Return (ok, value_or_error) tuples; caller decides how to surface the error.
- Unknown keys are dropped from the normalized output.

Schema Mini-Language (Python dict):
{
  'field_name': ('type', required: bool, extras: dict)
}
Supported types: 'str', 'int', 'float', 'bool', 'list', 'dict'
Extras examples:
  max_len, min_len, allow_empty, blank_as_missing (str)
  min, max (int / float, inclusive)
  item_type (list element primitive type)

Example:
 schema = {
   'grid_width': ('int', False, {'max': 200})
 }
 ok, data_or_err = validate(data, schema)

If invalid: (False, {'field': 'grid_width', 'error': 'must be <= 200', 'code': 'max'})
If valid: (True, normalized_data)
"""
from __future__ import annotations

from typing import Any, Dict, Tuple

PRIMITIVES = {
    'str': str,
    'int': int,
    'float': (int, float),
    'bool': bool,
    'list': list,
    'dict': dict,
}


class ValidationError(ValueError):
    def __init__(self, field: str, message: str, code: str):
        super().__init__(f'{field}: {message}')
        self.field = field
        self.message = message
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        return {'field': self.field, 'error': self.message, 'code': self.code}


def _fail(field: str, message: str, code: str) -> Tuple[bool, Dict[str, Any]]:
    return False, {'field': field, 'error': message, 'code': code}


def _check_range(name: str, value, extras: Dict[str, Any]):
    if 'min' in extras and value < extras['min']:
        return _fail(name, f"must be >= {extras['min']}", 'min')
    if 'max' in extras and value > extras['max']:
        return _fail(name, f"must be <= {extras['max']}", 'max')
    return None


def validate(payload: Any, schema: Dict[str, tuple]) -> Tuple[bool, Dict[str, Any]]:
    if not isinstance(payload, dict):
        return _fail('__root__', 'payload must be an object', 'type')
    out = {}
    for name, spec in schema.items():
        if not isinstance(spec, tuple) or len(spec) < 2:
            return _fail('__schema__', f'invalid spec for {name}', 'schema')
        type_name, required = spec[0], spec[1]
        extras = spec[2] if len(spec) > 2 else {}
        if type_name not in PRIMITIVES:
            return _fail('__schema__', f'unsupported type {type_name}', 'schema')
        if name not in payload or payload[name] is None:
            if required:
                return _fail(name, 'missing required field', 'required')
            continue
        value = payload[name]
        py_type = PRIMITIVES[type_name]
        # bool is an int subclass; only accept it where asked for
        if (isinstance(value, bool) and type_name != 'bool') or not isinstance(value, py_type):
            return _fail(name, f'expected {type_name}', 'type')
        if type_name == 'str':
            s = value.strip() if not extras.get('allow_empty') else value
            if extras.get('blank_as_missing') and not value.strip():
                continue
            if not extras.get('allow_empty') and len(s) == 0:
                return _fail(name, 'must not be empty', 'empty')
            if 'max_len' in extras and len(value) > extras['max_len']:
                return _fail(name, 'too long', 'max_len')
            if 'min_len' in extras and len(value) < extras['min_len']:
                return _fail(name, 'too short', 'min_len')
            out[name] = s
        elif type_name in ('int', 'float'):
            bad = _check_range(name, value, extras)
            if bad:
                return bad
            out[name] = float(value) if type_name == 'float' else value
        elif type_name == 'list':
            item_type = extras.get('item_type')
            if item_type:
                it = PRIMITIVES.get(item_type)
                if not it:
                    return _fail('__schema__', f'unsupported item_type {item_type}', 'schema')
                for idx, elem in enumerate(value):
                    if not isinstance(elem, it):
                        return _fail(name, f'element {idx} not {item_type}', 'item_type')
            out[name] = value
        else:
            out[name] = value
    return True, out


def require(payload: Any, schema: Dict[str, tuple]) -> Dict[str, Any]:
    """Raising variant of ``validate`` for callers that prefer exceptions."""
    ok, data = validate(payload, schema)
    if not ok:
        raise ValidationError(data['field'], data['error'], data['code'])
    return data


# Predefined schemas used by the API / CLI. Ranges are left to the generator's
# own clamping; only the grid cap is enforced here.
GENERATE_PARAMS = {
    'grid_width': ('int', False),
    'grid_height': ('int', False),
    'num_levels': ('int', False),
    'min_room_size': ('int', False),
    'max_room_size': ('int', False),
    'min_tile_span': ('int', False),
    'max_tile_span': ('int', False),
    'room_density': ('float', False),
    'extra_connections_ratio': ('float', False),
    'secret_door_ratio': ('float', False),
    'theme': ('str', False, {'max_len': 120, 'blank_as_missing': True}),
    'difficulty': ('str', False, {'max_len': 16, 'blank_as_missing': True}),
    'tile_type': ('str', False, {'max_len': 16, 'blank_as_missing': True}),
    'world_id': ('str', False, {'max_len': 64, 'blank_as_missing': True}),
}


def generate_params_schema(max_grid: int) -> Dict[str, tuple]:
    schema = dict(GENERATE_PARAMS)
    schema['grid_width'] = ('int', False, {'max': max_grid})
    schema['grid_height'] = ('int', False, {'max': max_grid})
    return schema
