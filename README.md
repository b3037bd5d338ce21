# tetfem

tetfem is a small finite element solver for reaction–diffusion problems on a
box in three dimensions. It splits the box into a structured grid of
hexahedra and splits each hexahedron into six tetrahedra. The solution uses
continuous, piecewise linear basis functions.

The package solves

    -a Δu + c u = f

with Dirichlet values on a chosen part of the boundary. It builds the mass
and stiffness matrices once. After that, it can rebuild the system for each
new right-hand side.

## Installation

    pip install .

The only dependency is numpy. To run the tests:

    pip install ".[test]"
    pytest

## Command line

    tetfem
    tetfem --output result.dat

This runs the built-in 3D example:

- The domain is the cube [-1, 1]³ with 6 points per axis.
- The diffusion coefficient is 1.0 and the reaction coefficient is 0.2.
- The solution is fixed to 1 on the faces z = ±1.
- It uses the four-point quadrature rule.
- It takes three steps, each with the constant source sin(π/2 · (n+1) · τ), where τ = 0.5 and n is the step index starting at 0.

Each step resets the system, adds the source, assembles the matrix, applies the boundary values and solves.

After each step the command writes the solution to the output file, which is `solution_3d.dat` by default. Each step overwrites the file. Each line of the file holds `x y z u` for one grid point. The command also prints a line for each written file and each finished step.

## Library use

```python
from tetfem.grid import Grid
from tetfem.basis import Basis, GlobalBasis
from tetfem.quadrature import QuadratureRule
from tetfem.problem import StationaryProblem

grid = Grid(-1, 1, -1, 1, -1, 1, 5, 5, 5)
global_basis = GlobalBasis(grid, Basis())
quadrature = QuadratureRule(2)

problem = StationaryProblem(
    global_basis,
    quadrature,
    lambda p: abs(p[2] + 1) < 1e-6 or abs(p[2] - 1) < 1e-6,
    lambda p: 1.0,
)
problem.diffusion_coefficient = 1.0
problem.reaction_coefficient = 0.2

problem.reset_system_vector()
problem.reset_system_matrix()
problem.add_source(lambda p: 1.0)
problem.assemble()
problem.assemble_boundary_conditions(lambda p: 1.0)
u = problem.solve()
problem.show("solution_3d.dat")
```

`tetfem.cli.run_3d(output_path)` runs the same example as the command and returns the final solution.

### Pieces

**`tetfem.quadrature.QuadratureRule(order=1)`**

Quadrature on the reference tetrahedron, whose vertices are (0,0,0), (1,0,0), (0,1,0) and (0,0,1).

- Order 1 is the one-point centroid rule. Any other order gives the symmetric four-point rule.
- `points_and_weights()` returns copies of the points, with shape (n, 3), and of the weights, with shape (n,).

**`tetfem.grid.Grid(xlow, xhigh, ylow, yhigh, zlow, zhigh, nx, ny, nz)`**

The grid and its cells. Its attributes are:

- `points`: the grid points. Point `i + j*nx + k*nx*ny` sits at the i-th x, the j-th y and the k-th z coordinate.
- `cells`: four point indices per tetrahedron.
- `adet`: the absolute Jacobian determinants of the cells.
- `inv_jac_t`: the transposed inverse Jacobians, with shape (cells, 3, 3).
- `divisions`: the tuple (nx, ny, nz).

Its methods are:

- `eval_reference_map(xhat)` maps the reference points into every cell. Row `T*len(xhat) + k` is the image of point k in cell T.
- `is_boundary_point(p)` tells whether `p` lies on a face of the box, within a tolerance of 1e-6.
- `inner_indices()` returns the indices of the interior points.
- `boundary_indices(locator)` returns the indices of the boundary points that `locator` accepts.

**`tetfem.basis.Basis`**

The four linear shape functions on the reference tetrahedron.

- `eval_phi(xhat)` returns their values.
- `eval_grad_phi(xhat)` returns their gradients. Row `4*k + j` holds the gradient of function j at point k.

**`tetfem.basis.GlobalBasis(grid, basis)`**

The global hat functions, one per grid point.

- `dof_map(i)` returns the cells that contain point `i`, together with the local index of `i` in each of them.
- `shared_dof_map(i, j)` returns the cells that contain both points, together with the local index of each point in each cell.
- `eval_phi(xhat, i)` evaluates the hat function of point `i` at `xhat` in each cell of its support.

**`tetfem.problem.StationaryProblem(global_basis, quadrature, dirichlet_locations=None, dirichlet_values=None)`**

Assembles and solves `(c*M + a*K) u = F`. The rows of the Dirichlet degrees of freedom are replaced by identity rows.

- If `dirichlet_locations` is not given, every boundary point is a Dirichlet point.
- If `dirichlet_values` is not given, the prescribed values are zero.

Its attributes are:

- `mass_matrix` and `stiffness_matrix`: the mass and stiffness matrices, with their Dirichlet rows set to zero.
- `system_matrix` and `system_vector`: the assembled system.
- `diffusion_coefficient` and `reaction_coefficient`: the coefficients `a` and `c`. Both start at 0.
- `dirichlet_dofs`, `free_dofs` and `all_dofs`: lists of degree-of-freedom indices.
- `solution`: a readable and settable copy of the current solution vector.

Its methods are:

- `add_source(f)` adds the load vector of `f` at the free degrees of freedom.
- `add_discrete_source(vec)` adds `M @ vec` to the right-hand side. It raises `ValueError` if `vec` has the wrong length.
- `assemble()` adds `c*M + a*K` to the system matrix.
- `assemble_boundary_conditions(values)` sets the identity rows and the prescribed values.
- `reset_system_matrix()` and `reset_system_vector()` set the system matrix and the system vector to zero.
- `solve()` solves the system, stores the result and returns it. If the matrix is singular, it falls back to a least-squares solution.
- `show(path="solution_3d.dat")` writes one `x y z u` line per grid point and returns the path. It raises `ValueError` if there is no solution, or if the solution's length does not match the number of grid points.

## Limits

- The only geometry is an axis-aligned box meshed by the package itself. There is no mesh import.
- All matrices are dense numpy arrays, so only small grids are practical.
- There is no time-stepping scheme. Each step of the example is a separate stationary solve with a new source.
- There is no plotting or viewer. The output is a plain text data file.