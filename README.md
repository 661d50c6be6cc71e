# giftbot

Building blocks for a multi-account giveaway bot, plus a small command line
for printing the build version and backing up or restoring the bot's files.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Command line

The `giftbot` command has these subcommands:

```
giftbot version
giftbot --version
giftbot backup create [output.zip]
giftbot backup restore backup.zip
```

`giftbot version` prints a line of the form
`steamgifts-bot <version> (commit <commit>, built <date>)`. Run without a
subcommand, `giftbot` prints its help.

Every command accepts `-c/--config PATH` to name the config file instead of
discovering it.

### Backups

```
giftbot backup create
giftbot backup create my-backup.zip
```

This writes a zip holding `config.yml` and, when they exist beside it,
`state.json` and `steamgifts-bot.log`. Without an output name the archive
is called `steamgifts-bot-backup-YYYY-MM-DD-HHMMSS.zip` in the current
directory. It fails if no config is found or no file could be archived.

```
giftbot backup restore my-backup.zip
```

This extracts `config.yml`, `state.json` and `steamgifts-bot.log` into the
directory of the config file (given with `--config`, or discovered, or else
the current directory). Other members are reported and skipped, members
whose names contain `..` are refused, and a restored `config.yml` is made
readable by its owner only.

On failure the command prints `error: <message>` to standard error and
exits with status 1.

### Where the config is looked for

Unless `--config` is given, the first existing file among these wins
(`giftbot.paths.config_candidates`):

1. `config.yml` beside the running program,
2. `config.yml` in the current directory,
3. `steamgifts-bot/config.yml` in the user's configuration directory.

## Library

- `giftbot.client` — `Client(cookie, user_agent, *, base_url, logger, limiter, timeout, proxy)`
  sends a `PHPSESSID` session cookie and fixed browser-like headers, waits a
  random delay from the `limiter` window (default 3–8 s) before each
  request, and retries up to three times with exponential backoff on
  connection errors and on 429/502/503/504. `get(path, cancel)` and
  `post_form(path, form, cancel)` return the response body as bytes; a
  status of 400 or more raises `HTTPError` (with `status`, `url`, `body`),
  a final connection failure raises `ConnectionError`, and setting the
  `threading.Event` passed as `cancel` raises `Cancelled`. `snippet(data)`
  shortens a body to 200 bytes for messages.
- `giftbot.status` — `StatusTracker(name)` holds one account's `Status`
  (username, points, last and next run, last error, entry counters, and the
  last 20 successful entries as `EnteredGiveaway` rows) behind a lock, plus
  the set of giveaway codes the server rejected. `snapshot()` returns an
  independent copy. `is_permanent_rejection(error)` tells rejections that
  will not change on retry ("Missing Base Game", "Exists in Account",
  "Previously Won", "Level … Required").
- `giftbot.paths` — `config_candidates()`, `find_config()`,
  `default_save_path()` and `log_file_path(config_path)`.
- `giftbot.backup` — `backup_candidates`, `add_to_zip`, `extract_from_zip`,
  `create_backup` and `restore_backup`, raising `BackupError` on failure.
- `giftbot.textfmt` — `redact`, `truncate`, `or_dash`, `format_duration`,
  `humanize_until` and `humanize_ago`.
- `giftbot.styles` — ANSI `Style` objects, the brand palette, `Rgb`,
  `hex_to_rgb`, `lerp_rgb`, `multi_lerp_rgb`, `gradient_multi`,
  `status_ok`, `status_err` and `footer_hint`.
- `giftbot.logview` — `format_log_line` renders JSON log records,
  `hslice` cuts styled text by visible column, and `LogView` tails a log
  file with vertical and horizontal scrolling driven by `handle_key`.
- `giftbot.menu` — `build_menu`, `Menu`, `ConfirmField` and `NoteField`,
  the key-driven menu and prompts of a terminal interface.

```python
from giftbot.client import Client, HTTPError

client = Client("placeholder", "", timeout=15.0)
try:
    page = client.get("/giveaways/search")
except HTTPError as err:
    print(err.status, err.url)
```

```python
from giftbot.status import StatusTracker, is_permanent_rejection

tracker = StatusTracker("main")
tracker.record_run("someone", 200)
tracker.record_entry("Game A", "AAA1", 10, True)
print(tracker.snapshot().entries_ok)               # 1
print(is_permanent_rejection("Level 5 Required"))  # True
```

## What it does not do

This package does not run the bot itself. It has no scan-and-enter loop,
no parsing of giveaway listing pages, no scoring of giveaways, and no
reading, validating or writing of `config.yml`; it only locates that file
and archives it. There is no setup wizard, no account management command,
no background service installation, no self-update, no metrics or web
dashboard, and no full-screen interactive application — the menu, prompt
and log-view classes are pieces such a screen would be built from. The
`--log-level` and `--log-format` options are accepted but have no effect
on the current commands.