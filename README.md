# hpcgbench

Data structures and helper routines for the High Performance Conjugate
Gradient (HPCG) benchmark, in plain Python on top of NumPy.

## Modules

- `hpcgbench.geometry`: `Geometry`, the process grid and local and global
  grid dimensions. Its `partz_ids` and `partz_nz` lists describe
  z-partitions with different local depths, and `npartz` counts them.
  `compute_rank_of_matrix_row(geom, index)` returns the rank that owns a
  global row.
- `hpcgbench.vector`: `Vector`, a dense float64 vector held in `values`.
  Build one with `Vector(n)` (all zeros) or `Vector.from_values(...)`. It
  has `zero()`, `scale_value(index, value)` (raises `IndexError` when out
  of range), `fill_random(rng=None)`, which fills with values in `[1, 2)`
  from any object with a `random()` method, and `copy_to(other)`, which
  copies into the leading entries of a vector at least as long.
- `hpcgbench.normcheck`: `check_norms(values)` returns a frozen
  `NormsResult` holding the samples, their `mean` and `variance`, and
  `passed`, which is true when the variance is below `1e-6`. An empty
  sequence raises `ValueError`.
- `hpcgbench.timer`: `mytimer()` returns the wall-clock seconds since its
  first call. The first call returns `0.0`.
- `hpcgbench.yaml_doc`: `YamlElement` collects nested key/value pairs.
  - `add(key, value)` appends a child and clears the parent's own value.
  - `get(key)` returns the first child with that key, or `None`.
  - `print_yaml(space)` renders the element indented by two spaces per
    level.
  - `format_value` renders an integer in full, a float as `%g`, and a
    string unchanged.

  `YamlDoc(name, version, destination_directory="",
  destination_file_name="")` is the top-level report.
  - `render()` returns the text, headed by `<name> version: <version>`.
  - `file_name(now)` builds the time-stamped file name
    `<name>-<version>_YYYY.MM.DD.HH.MM.SS.yaml`, or uses the given file
    name as the stem.
  - `generate_yaml(now=None)` writes the file, creating the destination
    directory if needed, returns the text and records the path in
    `output_path`.
- `hpcgbench.sparse_matrix`: `SparseMatrix`, the local matrix stored row
  by row in padded arrays (`matrix_values`, `mtx_ind_g`, `mtx_ind_l`,
  `nonzeros_in_row`, `matrix_diagonal`), together with its halo-exchange
  fields.
  - `SparseMatrix.from_rows` builds a single-process matrix from per-row
    `{column: value}` maps.
  - `copy_diagonal(vector)` and `replace_diagonal(vector)` read and write
    the diagonal.
- `hpcgbench.cg_data`: `CGData` holds the vectors `r`, `z`, `p` and `Ap`.
  `initialize_cg_data(A)` sizes `r` and `Ap` by the local rows, and `z`
  and `p` by the local columns. `MGData` holds one multigrid level's
  operators and coarse vectors, with one pre-smoother step and one
  post-smoother step by default.
- `hpcgbench.ell`: `convert_to_ell(A)` turns a `SparseMatrix` into an
  `EllMatrix`, column-major by slot, with unused slots set to `-1`.
  - It also lists the halo rows, meaning the rows with a column at or
    beyond the local row count, in ascending order, with their halo
    columns packed into `halo_col_ind` and `halo_val`.
  - It raises `ValueError` when there are more halo rows than
    `total_to_be_sent`.
  - `extract_diagonal(ell)` sets `diag_idx` and `inv_diag`.
  - `EllMatrix.copy_diagonal()` returns the diagonal as a `Vector`.
  - `EllMatrix.replace_diagonal(vector)` overwrites the diagonal and
    recomputes `inv_diag`.
  - `ell_block_size(width)` gives the row block, 32, 16, 8 or 4, chosen
    for an ELL width.
- `hpcgbench.problem_writer`: `write_problem(geom, A, b, x, xexact,
  directory=".")` writes `A.dat`, which holds one-based `row column value`
  triples, together with `x.dat`, `xexact.dat` and `b.dat`. It returns
  their paths and raises `ValueError` when `geom.size != 1`.
- `hpcgbench.params`: `parse_params(argv, comm_rank, comm_size,
  num_threads)` builds an `HpcgParams` from the arguments. `argv` does not
  include the program name.
  - The leading positional values are read in this order: nx, ny, nz, rt,
    pz, zl, zu, npx, npy, npz, device. A value below 10 counts as unset.
  - Options `--nx=` `--ny=` `--nz=` `--rt=` `--pz=` `--zl=` `--zu=`
    `--npx=` `--npy=` `--npz=` `--dev=` override the positional values.
  - `--tol=` sets `tol` and turns `verify` off.
  - A grid dimension below 16 is raised to the largest of the other two,
    or to 16.

  `log_file_name(when, rank, debug)` returns `hpcgYYYYMMDDTHHMMSS.txt`
  for rank 0. For other ranks it returns the same name with `_<rank>`
  appended when `debug` is true, and the null device otherwise.

## Example

```python
from hpcgbench.normcheck import check_norms
from hpcgbench.params import parse_params
from hpcgbench.sparse_matrix import SparseMatrix
from hpcgbench.ell import convert_to_ell, extract_diagonal

params = parse_params(["--nx=32", "--ny=32", "--nz=32"], 0, 1, 1)

A = SparseMatrix.from_rows([{0: 4.0, 1: -1.0}, {0: -1.0, 1: 4.0}])
ell = convert_to_ell(A)
extract_diagonal(ell)

result = check_norms([1.0e-8, 1.0e-8, 1.0e-8])
```

Errors are raised as exceptions rather than returned as status codes.

## What this package does not do

It provides no command-line program and no solver. There is no conjugate
gradient iteration, multigrid preconditioner, matrix-vector product,
problem generator or halo exchange between processes. Multi-process runs
are described only by the `Geometry`, `SparseMatrix` and `HpcgParams`
fields; nothing here communicates between processes.

## Requirements

Python 3.10 or later and NumPy. Install the `test` extra for pytest.