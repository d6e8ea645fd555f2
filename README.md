# tensorlab

Numerical routines over NumPy arrays: element-wise comparisons, masking and
index-based selection, tensor construction and concatenation, sorting and
order statistics, random sampling, BLAS-style products, and LAPACK-backed
solvers and decompositions.

Every function takes array-like inputs and returns new arrays; no input is
modified. Badly shaped or out-of-range arguments raise `ValueError` or
`IndexError`. A LAPACK routine that fails on its data raises
`tensorlab.solvers.LapackError`, a subclass of `ArithmeticError` that carries
the routine name (`routine`) and its status code (`info`).

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | Contents |
| --- | --- |
| `tensorlab.comparison` | `Comparison`, `compare`, `equal`, `logical_all`, `logical_any` |
| `tensorlab.masking` | `masked_fill`, `masked_copy`, `masked_select`, `nonzero` |
| `tensorlab.indexing` | `index_select`, `index_copy`, `index_add`, `index_fill`, `gather`, `scatter`, `scatter_fill` |
| `tensorlab.construction` | `zeros`, `ones`, `arange`, `linspace`, `logspace`, `reshape`, `cat` |
| `tensorlab.sorting` | `sort`, `kthvalue`, `mode`, `median`, `topk` |
| `tensorlab.sampling` | `random`, `geometric`, `bernoulli`, `uniform`, `normal`, `exponential`, `cauchy`, `log_normal`, `multinomial`, `rand`, `randn`, `randperm` |
| `tensorlab.blas` | `addmv`, `addmm`, `addr`, `addbmm`, `baddbmm`, `match` |
| `tensorlab.solvers` | `LapackError`, `gesv`, `trtrs`, `gels`, `getri`, `potrf`, `potrs`, `potri`, `pstrf`, `clear_triangle`, `copy_triangle` |
| `tensorlab.decompositions` | `syev`, `geev`, `gesvd`, `qr`, `geqrf`, `orgqr`, `ormqr` |

## Conventions

* Dimensions and indices are counted from 0. Index tensors given to the
  `tensorlab.indexing` functions must hold integers within the size of the
  indexed dimension; negative indices are rejected with `IndexError`.
* `compare` takes a `Comparison` member or its name (`"lt"`, `"gt"`, `"le"`,
  `"ge"`, `"eq"`, `"ne"`) and returns a `uint8` mask, or with
  `as_mask=False` a 0/1 array of the input's dtype.
* Masks hold only 0 and 1; any other value raises `ValueError`.
* `kthvalue`, `mode` and `median` keep the reduced dimension with size 1.
  `median` of an even-sized dimension is the lower middle element.
* `sort` is stable in both directions, and `sort`, `kthvalue`, `mode`,
  `median` and `topk` return values together with their 0-based positions.
* `arange` includes `xmax` when the steps reach it exactly.
* `cat` treats missing trailing dimensions as size 1, so vectors can be
  joined as the columns of a matrix.
* The sampling functions take a `numpy.random.Generator`, an integer seed,
  or `None` for fresh entropy, so results can be reproduced from a seed.
* In `tensorlab.blas`, a `beta` of 0 means `t` is not read and an `alpha` of
  0 means the product is not formed (except in `addr`, which always scales
  `t` when `beta` is not 1).
* Flags for the LAPACK routines (`uplo`, `trans`, `diag`, `jobz`, `jobvr`,
  `jobu`, `side`) are read from their first letter, case-insensitively.

## Example

```python
import numpy as np
from tensorlab import decompositions, solvers, sorting

a = np.array([[4.0, 1.0], [2.0, 3.0]])
b = np.array([[1.0], [2.0]])

x, lu = solvers.gesv(b, a)               # a @ x == b
ordered, order = sorting.sort(a, 1, True)  # rows sorted descending
q, r = decompositions.qr(a)              # a == q @ r
```

## What the package does not cover

The package has no functions for element-wise arithmetic or elementary math
(addition by a scalar, clamping, logarithms, trigonometric functions and the
like), none for reductions over a whole tensor or along a dimension (sum,
product, mean, variance, norms, minimum and maximum, cumulative sums,
histograms), and no matrix helpers such as diagonals, identity matrices,
triangle extraction outside the LAPACK routines, traces or cross products.
Use NumPy directly for those.