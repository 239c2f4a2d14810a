"""Shared type aliases

API Gateway and AppConfig payloads are plain JSON objects, so they are typed
as dicts rather than modelled field by field.
"""

from typing import Any

from botocore.client import BaseClient


# API Gateway Lambda proxy integration
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]

# AppConfig: the whole document, and the single-backend slice one Lambda receives
type AppConfig = dict[str, Any]
type LambdaConfiguration = dict[str, Any]

# Serialized UrlRecordModel (JSON snapshot entries, API bodies)
type RecordDict = dict[str, Any]

# Redis hash of a UrlRecordModel as written by HSET; values come back as str
type RecordHash = dict[str, str | int]

type AppConfigDataClient = BaseClient
