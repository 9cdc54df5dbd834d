"""Load handler metadata produced by a separate extraction pass.

The manifest is JSON mirroring the domain models::

    {
      "controllers": [
        {
          "name": "com.example.UserController",
          "base_path": "/user",
          "methods": [
            {
              "name": "create",
              "sub_path": "/create",
              "eligible": true,
              "parameters": [
                {"name": "req", "body": true,
                 "type": {"kind": "structured", "name": "CreateUser", "fields": [
                   {"name": "name", "type": {"kind": "primitive", "name": "string"}}
                 ]}}
              ]
            }
          ]
        }
      ]
    }
"""
from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ValidationError

from apistub.domain.errors import ManifestError
from apistub.domain.models import HandlerClass


class Manifest(BaseModel):
    controllers: tuple[HandlerClass, ...] = ()


def load_manifest(path: Path) -> list[HandlerClass]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(path, str(exc)) from exc

    try:
        manifest = Manifest.model_validate_json(raw)
    except ValidationError as exc:
        raise ManifestError(path, str(exc)) from exc

    return list(manifest.controllers)
