from __future__ import annotations

from typing import Iterable, Mapping, Union
from urllib.parse import parse_qsl, urlsplit

from flask import Request
from werkzeug.datastructures import MultiDict

from .errors import MalformedSubmissionError
from .schema import RawFields

FORM_MIMETYPES = frozenset({"application/x-www-form-urlencoded", "multipart/form-data"})


def collapse(multi: MultiDict, *, list_fields: Iterable[str] = ()) -> RawFields:
    """Turn a multi-valued mapping into :data:`RawFields`.

    Scalar fields keep the LAST occurrence of a repeated key; fields named in
    ``list_fields`` keep every occurrence in submission order.
    """
    list_fields = frozenset(list_fields)
    out: RawFields = {}
    for key in multi.keys():
        values = multi.getlist(key)
        if key in list_fields:
            out[key] = [str(v) for v in values]
        elif values:
            out[key] = str(values[-1])
    return out


def get_raw_form_fields(req: Request, *, list_fields: Iterable[str] = ()) -> RawFields:
    """Read every field of a url-encoded or multipart body.

    Fields the form's schema does not know about are kept; the validator
    decides what is relevant. Uploaded files are not fields.
    """
    if req.mimetype not in FORM_MIMETYPES:
        if not req.get_data(cache=True):
            return {}
        raise MalformedSubmissionError(f"Unsupported submission type: {req.mimetype or 'unknown'}")
    return collapse(req.form, list_fields=list_fields)


def get_query_params(
    source: Union[str, Mapping, MultiDict],
    names: Iterable[str],
    *,
    list_fields: Iterable[str] = (),
) -> RawFields:
    """Read only the expected ``names`` from a query string.

    ``source`` is either a full URL / bare query string or an already parsed
    mapping such as ``request.args``. Anything not listed (page numbers,
    tracking parameters) is dropped.
    """
    if isinstance(source, str):
        query = urlsplit(source).query if ("?" in source or "://" in source) else source
        multi = MultiDict(parse_qsl(query, keep_blank_values=True))
    elif isinstance(source, MultiDict):
        multi = source
    else:
        multi = MultiDict(source)

    wanted = set(names)
    picked = MultiDict([(k, v) for k, v in multi.items(multi=True) if k in wanted])
    return collapse(picked, list_fields=list_fields)
