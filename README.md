# xeol

`xeol` is a library for working out whether software has reached its end
of life. It identifies Linux distributions and turns them into CPE names,
looks up end-of-life release cycles through any store that implements a
small reading interface, collects the findings into a de-duplicated,
sortable set, and reads and writes the metadata and listing files that
describe downloadable end-of-life databases.

## Installation

```
pip install .
```

There are no runtime dependencies beyond the standard library.

## Modules

- `xeol.distro`: the supported distribution types (`DistroType`, with
  `cpe_vendor()` and `cpe_product()`), the os-release style `Release`,
  version parsing (`parse_version`, `Version`), `type_from_release`,
  `new_distro`, `distro_from_release` and `destructure_cpe`.
- `xeol.eol`: the `Cycle`, `Product` and `DatabaseID` records, `new_id`,
  `cycle_from_json`, and the `EolStoreReader` protocol
  (`get_cycles_by_purl`, `get_cycles_by_cpe`, `get_all_products`).
- `xeol.provider`: `EolProvider`, which looks up cycles for a distribution
  release (`get_by_distro_cpe`) or a short package URL
  (`get_by_short_purl`), raising `ProviderError` when it cannot.
- `xeol.match`: `Match`, `Fingerprint`, `MatcherType`, `match_sort_key` and
  the `Matches` collection.
- `xeol.metadata`: `Metadata`, `Status`, `parse_rfc3339`,
  `metadata_from_json`, `metadata_from_dir` and `is_superseded_by`.
- `xeol.listing`: `ListingEntry`, `Listing`, `new_listing`,
  `listing_from_file`, `listing_entry_from_json` and
  `listing_entry_from_archive`.
- `xeol.events`: `EventType`, `Event`, `StagedProgress`, `BadPayloadError`
  and the payload parsers `parse_app_update_available`,
  `parse_non_root_command_finished` and `parse_update_eol_database`.
- `xeol.nullable`: `NullString`, `to_null_string` and
  `null_string_from_json`.

## Identifying a distribution

```python
from xeol.distro import Release, distro_from_release, destructure_cpe

release = Release(id="fedora", version="29", cpe_name="cpe:/o:fedoraproject:fedora:29")
distro = distro_from_release(release)
print(distro.name(), distro.major_version())      # fedora 29

print(destructure_cpe("cpe:2.3:a:apache:struts:2.5.10"))
# ('cpe:2.3:a:apache:struts', '2.5.10')
```

When a release has no CPE name but has a version, `new_distro` builds one
of the form `cpe:2.3:o:<vendor>:<product>:<version>`. An unknown
distribution raises `ValueError`.

## Looking up cycles

`EolProvider` works over any object with the `EolStoreReader` methods:

```python
from xeol.eol import Cycle
from xeol.provider import EolProvider

class MemoryStore:
    def __init__(self, data):
        self.data = data
    def get_cycles_by_purl(self, purl):
        return self.data.get(purl, [])
    def get_cycles_by_cpe(self, cpe):
        return self.data.get(cpe, [])
    def get_all_products(self):
        return []

store = MemoryStore({
    "cpe:/o:fedoraproject:fedora": [Cycle(product_name="Fedora", release_cycle="29", eol="2019-11-26")],
    "pkg:generic/python": [Cycle(product_name="Python", release_cycle="2.7", eol="2020-01-01")],
})
provider = EolProvider(store)

version, cycles = provider.get_by_distro_cpe(release)   # "29", [Cycle(...)]
python_cycles = provider.get_by_short_purl("pkg:generic/python")
```

## Collecting matches

A `Match` pairs a `Cycle` with a package object that has `id`, `name`,
`version`, `type` and `purl` attributes.

```python
from xeol.match import Match, Matches

matches = Matches()
matches.add(Match(cycle, package))
for m in matches.sorted():
    print(m.summary())
```

Matches are ordered by product name, release cycle, package name, package
version and package type. Adding a match with the same fingerprint
(release cycle, release date and package id) twice keeps one entry.

## Database metadata and listings

```python
from xeol.listing import listing_from_file
from xeol.metadata import metadata_from_dir, is_superseded_by

listing = listing_from_file("listing.json")
candidate = listing.best_update(1)          # newest entry for schema 1, or None
current = metadata_from_dir("/var/cache/xeol/db/1")   # None if no metadata.json
if candidate and is_superseded_by(current, candidate):
    print("newer database available:", candidate.url)
```

Timestamps are read as RFC 3339 and kept in UTC. A newer schema version
always wins; for the same version, a later build time wins.

## What this package does not do

It has no database engine of its own: there is no SQLite-backed store, so
lookups need a reader you supply. It does not download, verify, install or
age-check databases, and it has no command-line program.

## Running the tests

```
pip install .[test]
pytest
```