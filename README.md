# klirr

A library of building blocks for invoicing consulting services and expenses
with as little upkeep as possible:

- **Invoice numbers** are calculated from the last invoice number you issued
  and the month you issued it. Months you were off are skipped, and expense
  invoices get a number one higher than the service invoice of the same month.
- **Working days** (Monday to Friday) in a month are counted.
- **Exchange rates** for expenses are fetched per transaction date and cached
  on disk, so a rate is never fetched twice.
- **Data files** are kept as JSON in a per-user data directory.
- **Typst data**: plain values are rendered as Typst dictionaries that a
  template can use.

Install with `pip install .`; the tests need the `test` extra.

## Months

`klirr.calendar.YearAndMonth` is the unit invoices are issued for. It is
immutable, ordered chronologically and prints as `YYYY-MM`.

```python
from klirr.calendar import YearAndMonth

january = YearAndMonth.parse("2025-01")
january.last_day_of_month()          # 31
january.to_date_end_of_month()       # datetime.date(2025, 1, 31)
str(january.one_month_earlier())     # "2024-12"
YearAndMonth.parse("2025-04").elapsed_months_since(january)  # 3

YearAndMonth.current()               # this month
YearAndMonth.last()                  # the month before this one
```

An invalid month, an unparsable string, or a `start` later than the end month
in `elapsed_months_since` raises `ValueError`.

## Invoice numbers and working days

```python
from klirr.calendar import YearAndMonth
from klirr.invoicing import calculate_invoice_number, working_days_in_month

number = calculate_invoice_number(
    100,                              # last invoice number issued
    YearAndMonth.parse("2024-01"),    # ...in this month
    YearAndMonth.parse("2024-08"),    # the month being invoiced
    True,                             # an expense invoice
    [YearAndMonth.parse("2024-03"), YearAndMonth.parse("2024-04")],  # months off
)
# 100 + 7 months elapsed - 2 months off + 1 for expenses = 106

working_days_in_month(YearAndMonth.parse("2024-01"), [])  # 23
```

`calculate_invoice_number` raises `ValueError` if the offset month is itself a
month off. `working_days_in_month` raises
`klirr.invoicing.TargetMonthInMonthsOffError` for a month recorded as off.

## Data files

`klirr.storage` reads and writes data files:

- `data_dir(create_if_not_exists=False)` returns the `klirr/data` folder in
  the platform's user data directory and can create it.
- `path_to_data_file(base_path, name)` gives `base_path/<name>.json`. The
  module defines the names used for vendor, client, payment, service fees,
  invoice info, expenses and cached rates (`DATA_FILE_NAME_*`).
- `save_to_disk(model, path)` writes a model as indented JSON. Objects with a
  `to_dict()` method and dataclasses are converted first.
- `load_data(base_path, name)` reads and parses a data file.

Failures to serialize, write, read or parse raise `klirr.storage.StorageError`.

`klirr.data_admin.mutate_data_file(data_path, name, mutate)` loads a data
file, lets `mutate` change it in place or return a replacement, saves it back
and returns the saved value.

`klirr.data_admin.DataSelector` names a part of the data to edit: `ALL`,
`VENDOR`, `CLIENT`, `INFORMATION`, `PAYMENT_INFO` or `SERVICE_FEES`.
`DataSelector.includes(target)` is true for `ALL` and for the same selector.

## Exchange rates

```python
import datetime
from decimal import Decimal
from klirr.exchange_rates import ExchangeRatesFetcher

fetcher = ExchangeRatesFetcher("/path/to/cache")
rates = fetcher.fetch_for_expenses("EUR", expenses)
rates.rates  # e.g. {"GBP": Decimal("1.174")}
```

Each expense needs a `transaction_date` (a `datetime.date`) and a `currency`
code. Cached rates are used first; missing ones are fetched from the
Frankfurter API and the cache (`cached_rates.json`) is written back. A cache
that cannot be read is treated as empty, and failing to write it is only
logged. Pass `fetch_rate=` to supply rates another way.

The lower-level pieces are `format_url`, `parse_rates_response`, `http_fetch`
and `get_exchange_rate`, which returns a rate of one without any request when
both currencies are the same. Network and parsing problems, and a response
without the wanted rate, raise `klirr.exchange_rates.ExchangeRateError`.

## Typst data

```python
from klirr.typst import to_typst_value, to_typst_fn

to_typst_value({"name": "Coffee", "quantity": 3})
# '(\n  name: "Coffee",\n  quantity: 3,\n)'
```

Mappings and lists become parenthesised Typst dictionaries and arrays, `None`
becomes `none`. A single-entry mapping whose value is a number, string or
mapping is treated as an enum variant and its key is lower-cased.
`to_typst_fn(value)` wraps the result in a `#let provide() = { ... }` function.

## Files and PDFs

`klirr.paths` creates output folders (`create_folder_if_needed`,
`create_folder_to_parent_of_path_if_needed`,
`create_folder_relative_to_workspace`) and saves PDF bytes with
`save_pdf(pdf, pdf_path)`. Errors raise `OutputDirectoryError` and
`SavePdfError`.

`save_pdf_location_to_tmp_file(pdf_location, target=None)` writes a PDF's path
into `target`, or, without a target, into the file named by the environment
variable `TMP_FILE_FOR_PATH_TO_PDF` if it is set, so that scripts can find and
open the result.

## Logging

`klirr.logging_setup.init_logging()` sets up coloured, timestamped logging of
the `klirr` loggers on standard output, once. The level is read from the
`KLIRR_LOG` environment variable (`off`, `error`, `warn`, `info`, `debug` or
`trace`) and defaults to `info`; an unknown level raises `ValueError`.
`init_logging_with_level(level)` sets a level directly.

## What this package does not do

- It has no command-line program; everything is used from Python.
- It does not render PDFs. It prepares Typst data and saves PDF bytes that
  were produced elsewhere.
- It has no interactive prompts for entering data and no typed models for
  vendor, client, payment or service-fee details; data files hold plain JSON.