# llmapi

Plain-Python building blocks for talking to an assistants-style language
model HTTP API. The package has no runtime dependencies. It describes what
to send and how to read what comes back. It does not open connections
itself.

## What is inside

- `llmapi.schema.definition`: the `Definition` and `DataType` types for
  small JSON schemas. `generate_schema_for_type` builds a schema from a
  Python type, and `Definition.to_json` serialises one.
- `llmapi.schema.validate`: `validate(schema, data)` checks decoded JSON
  against a `Definition`. `verify_schema_and_unmarshal(schema, content)`
  parses JSON text and raises `SchemaValidationError` when the data does
  not match the schema.
- `llmapi.ratelimit`: `RateLimitHeaders.from_headers` reads the
  `x-ratelimit-*` response headers. `ResetTime.to_datetime` turns a reset
  duration such as `"6m0s"` into a point in time.
- `llmapi.reasoning`: `ReasoningValidator` rejects parameters that
  o1/o3-series models do not accept. It raises `MaxTokensDeprecatedError`,
  `LogprobsLimitationError` or `ParameterLimitationError`.
- `llmapi.request`: `ApiRequest`, `HttpMethod`, `Pagination` and
  `encode_query` describe one call, which is made up of a method, a path,
  a query and an optional body.
- `llmapi.stream`: `StreamReader` reads a server-sent event stream. It
  yields each `data:` payload and stops at `[DONE]`. It raises
  `StreamAPIError` when the server sends an error body, and
  `TooManyEmptyStreamMessagesError` when the stream sends too many empty
  lines.
- Endpoint modules `models`, `moderation`, `speech`, `thread`, `messages`,
  `run` and `vector_store`. Each holds dataclasses for its requests and
  responses (`to_dict` / `from_dict`) and one function per endpoint, for
  example `create_thread`, `list_messages` or `cancel_run`. Each of those
  functions returns the request to send.

## Example

```python
from llmapi.schema.definition import DataType, Definition
from llmapi.schema.validate import validate

schema = Definition(
    type=DataType.OBJECT,
    properties={"name": Definition(type=DataType.STRING)},
    required=["name"],
)
assert validate(schema, {"name": "abc"})
assert not validate(schema, {})
```

Reading a stream:

```python
import io
from llmapi.stream import StreamReader

body = io.BytesIO(b'data: {"id": "1"}\n\ndata: [DONE]\n\n')
with StreamReader(body) as stream:
    for event in stream:
        print(event["id"])
```

## Tests

```
pip install -e ".[test]"
pytest
```