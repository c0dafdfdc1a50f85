# fpcli

Building blocks for a command-line client for notebooks: log parsing,
timestamp detection, notebook URLs, a configuration file, table and JSON
output, interactive prompts, and display helpers for data sources, daemons
and events.

## Modules

- **`fpcli.logs`**: `parse_logs(output)` turns command output into a list
  of `Event` records (`time`, `title`, `otel`). Each non-empty line is tried
  as a JSON object (nested fields are flattened to dotted and indexed keys),
  then as an nginx access-log line, then as a GitHub Actions log line. Lines
  that are not log records take the time of the nearest record, or the
  current time when there is none. `contains_logs(output)` tells whether any
  line is a log record; `parse_log(line)` parses a single line;
  `flatten_nested_value(key, value)` does the flattening.
  Fields such as `host.*` or `service.*` go into `OtelMetadata.resource`,
  the rest into `OtelMetadata.attributes`.
- **`fpcli.timestamps`**: `parse_any_timestamp(value)` accepts integer Unix
  seconds, RFC 3339, ISO 8601, RFC 2822, nginx timestamps and fractional
  Unix seconds as numbers or strings. It returns an `AnyTimestamp`, tagged
  with the `TimestampKind` that matched first, and raises `ValueError` when
  none fits. `parse_nginx_timestamp` and `parse_unix_float` are available on
  their own.
- **`fpcli.urls`**: `NotebookUrlBuilder(workspace_id, notebook_id)` builds
  notebook links. Its `base_url`, `title` and `cell_id` methods return new
  builders, and `url()` returns the link. `slugify(text)` makes the title
  slug.
- **`fpcli.config`**: `Config.load(path)` and `Config.save()` read and write
  the TOML file that holds `api_token`. `api_client_configuration(config_path,
  base_url)` and `api_client_configuration_from_token(token, base_url)` build
  an `ApiClient` holding the server, a user agent and a `Bearer`
  `Authorization` header.
- **`fpcli.manifest`**: `Manifest.from_env()` collects build details from
  the `FP_BUILD_TIMESTAMP`, `FP_BUILD_VERSION`, `FP_COMMIT_DATE`,
  `FP_COMMIT_SHA` and `FP_COMMIT_BRANCH` environment variables (`unknown`
  when unset), plus the Python version and platform. `key_values()` gives
  them as display rows.
- **`fpcli.output`**: `output_list` prints dataclass rows under their column
  titles, and `output_details` prints them without titles. `output_string_list`
  prints one string per line, and `output_json` prints indented JSON.
  `render_table(rows, titles)` returns the aligned text. `GenericKeyValue` is
  a key/value row.
- **`fpcli.events`**, **`fpcli.data_sources`**, **`fpcli.daemons`**: table
  rows and details for API records given as mappings. These are `EventRow`,
  `event_details` and `print_labels`; `DataSourceRow`, `data_source_details`
  and `ProviderConfig`, which parses a JSON object; and `ProxySummaryRow`,
  `DataSourceAndProxySummaryRow` and `proxy_details`. `count_proxy_data_sources`
  and `sort_proxy_summaries` order daemons with connected ones first.
- **`fpcli.arguments`**: `KeyValueArgument.parse("key=value")`,
  `labels_to_map` and `notebook_title`.
- **`fpcli.naming`**: `Name` validates resource names (1–63 lowercase ASCII
  letters, digits and dashes, starting and ending alphanumeric).
  `sluggify_str(text)` turns free text into a `Name`, or `None`.
- **`fpcli.prompts`**: `text_opt`, `text_req`, `name_opt`, `name_req` and
  `bool_req` take a value from an argument, else ask on the terminal, else
  use the default. `select_item(prompt, items, default)` lets the user pick
  an item by number or by matching text.
- **`fpcli.cell_writer`**: `CellWriter(append_cells, notebook_id, command)`
  buffers a command's output. `flush()` writes it as a log cell (preceded by
  a text cell) when it holds log records, else as a code cell, using the
  `append_cells(notebook_id, cells)` callable you supply.
- **`fpcli.version_check`**: `background_version_check(fetch_latest_version,
  current_version, config_dir=None)` calls your fetch function at most once a
  day. It returns the newer version, or `None`.

## Examples

```python
from fpcli.logs import parse_logs

events = parse_logs('{"ts": "2018-01-01T00:00:00.000Z", "body": "test"}')
print(events[0].title)  # test
```

```python
from fpcli.timestamps import parse_any_timestamp

stamp = parse_any_timestamp("11/Jul/2022:10:56:04 +0000")
print(stamp.kind)  # TimestampKind.NGINX
```

```python
from fpcli.urls import NotebookUrlBuilder, slugify

url = (
    NotebookUrlBuilder("JwpDrHrlS-OWjxYXe9gJ2g", "ftTv2S3yRPyJyQQbopXonQ")
    .base_url("https://example.com")
    .title("Reported issues on API")
    .cell_id("dNJvBmg90N-dR_6iZV99LQ")
    .url()
)
print(url)
# https://example.com/workspaces/JwpDrHrlS-OWjxYXe9gJ2g/notebooks/Reported-issues-on-API-ftTv2S3yRPyJyQQbopXonQ#dNJvBmg90N-dR_6iZV99LQ

print(slugify("title   title"))  # title-title
```

```python
from fpcli.arguments import KeyValueArgument

label = KeyValueArgument.parse("env=production")
print(label.key, label.value)  # env production
```

## Configuration

By default the config file is `config.toml` in the platform's user
configuration directory for `fiberplane-cli`. Another path can be passed to
`Config.load`. If that path is a directory, `config.toml` beside it is used
instead. A missing file gives a configuration with no API token.

## What this package does not do

It provides no command-line program and no entry point. It makes no HTTP
requests of its own: there is no API client, no login or logout flow, and no
local web server. The functions that need the API take data you pass in or a
callable you supply (`CellWriter`, `background_version_check`). It does not
start or run shell commands, and it does not convert notebooks to or from
Markdown.