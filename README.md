# esimlpa

Local Profile Assistant commands for eUICC (eSIM) chips: list, enable,
disable, rename, delete, discover and download profiles; list, send and
remove pending notifications; read chip information, set the default
SM-DP+ address and reset the chip.

The commands work against any object that implements the abstract
`esimlpa.backend.Euicc` interface. The package itself ships no such
implementation (see "What is not included").

## Installation

```
pip install .
```

## Running commands

Commands are run with `esimlpa.cli.run(argv, session)`. `argv[0]` is the
program name; the rest names a command and its arguments. `session` is an
`esimlpa.context.Session` wrapping your `Euicc` implementation:

```python
from esimlpa.cli import run
from esimlpa.context import Session

card = MyCard()  # your subclass of esimlpa.backend.Euicc
status = run(["esimlpa", "profile", "list"], Session(card))
```

`run` returns 0 on success and -1 on failure, and closes the eUICC
afterwards. `Session` also takes `environ` (a mapping used instead of
`os.environ`) and `stream` (where output is written instead of standard
output).

Available commands:

```
version
chip info
chip defaultsmdp <smdp>
chip purge yes
profile list
profile enable <iccid/aid> [refreshflag]
profile disable <iccid/aid> [refreshflag]
profile nickname <iccid> [new_name]
profile delete <iccid/aid>
profile discovery [-s SM-DS] [-i IMEI]
profile download [-s SM-DP+] [-m MATCHING-ID] [-i IMEI] [-c CODE] [-a ACTIVATION-CODE] [-p]
notification list
notification process [-a] [-r] [seqNumber ...]
notification remove [-a] [seqNumber ...]
```

Notes:

- `chip`, `profile` and `notification` open the eUICC before running their
  sub-command.
- `chip purge` only resets the chip when its argument is exactly `yes`.
- `profile nickname` without a name clears the nickname.
- `profile discovery` asks `lpa.ds.gsma.com` when `-s` is not given and
  prints the list of SM-DP+ addresses it returns.
- `profile download -a` takes an activation code such as
  `LPA:1$smdp.example.com$MATCHING-ID`; the `LPA:` prefix is optional. If a
  code demands a confirmation code, `-c` must be given. Without an SM-DP+
  address, the chip's default address is used. `-p` shows the profile
  metadata and reads `y`/`Y` from standard input before installing. SIGINT
  during a download cancels the session at the next step.
- `notification process -r` removes each notification after sending it;
  `-a` works on every pending notification.

## Output

Each record is one JSON object on its own line:

```
{"type":"progress","payload":{"code":0,"message":"es10b_authenticate_server","data":"smdp.example.com"}}
{"type":"lpa","payload":{"code":0,"message":"success","data":null}}
```

Progress records have `"type": "progress"`. The final record has
`"type": "lpa"`, with `code` 0 and message `success` on success, or `code`
-1, the name of the failing step as `message` and a reason as `data` on
failure. Usage help is printed as plain text. The records are produced by
`esimlpa.jprint` (`emit_success`, `emit_error`, `emit_progress`,
`emit_progress_obj`).

## Environment

Read when the eUICC is opened (`Session.init_euicc`):

- `LPAC_CUSTOM_ISD_R_AID`: hex string of a custom ISD-R AID, 1 to 16 bytes.
- `LPAC_CUSTOM_ES10X_MSS`: ES10x maximum segment size, 6 to 255.

Read by the `esimlpa` command (`esimlpa.cli.main`):

- `LPAC_APDU`: APDU driver name (default `pcsc`).
- `LPAC_HTTP`: HTTP driver name (default `curl`).

## Modules

- `esimlpa.backend`: the `Euicc` interface, `EuiccError` and the record
  dataclasses it returns.
- `esimlpa.context`: `Session`, `Settings`, `settings_from_env`,
  `parse_custom_aid`, `parse_custom_mss`, `InitError`.
- `esimlpa.chip`, `esimlpa.profile`, `esimlpa.download`,
  `esimlpa.notification`: the commands.
- `esimlpa.applet`: `Applet`, `dispatch` and `usage` for named sub-commands.
- `esimlpa.tostr`: the eUICC enumerations and their display names.
- `esimlpa.cli`: `run`, `root_applets`, `version` and `main`.

## What is not included

The package contains no card (APDU) or HTTP driver and no concrete `Euicc`
implementation. The installed `esimlpa` command has no drivers registered,
so it prints `unknown APDU driver: <name>` to standard error and exits
with -1. To talk to a real chip, implement `esimlpa.backend.Euicc` and run
commands through `esimlpa.cli.run`.