import numpy as np
import pytest

from tetfem.basis import Basis, GlobalBasis
from tetfem.grid import Grid
from tetfem.problem import StationaryProblem
from tetfem.quadrature import QuadratureRule


def _make(n=3, locations=None, values=None):
    grid = Grid(-1, 1, -1, 1, -1, 1, n, n, n)
    gb = GlobalBasis(grid, Basis())
    quad = QuadratureRule(2)
    kwargs = {}
    if locations is not None:
        kwargs["dirichlet_locations"] = locations
    if values is not None:
        kwargs["dirichlet_values"] = values
    return grid, StationaryProblem(gb, quad, **kwargs)


def test_default_dirichlet_is_whole_boundary():
    grid, prob = _make()
    assert prob.free_dofs == grid.inner_indices()
    assert prob.free_dofs == [13]
    assert sorted(prob.dirichlet_dofs + prob.free_dofs) == list(range(27))


def test_constructor_sets_boundary_rows():
    _, prob = _make(values=lambda p: 2.5)
    for dof in prob.dirichlet_dofs:
        assert prob.system_matrix[dof, dof] == 1.0
        assert prob.system_vector[dof] == 2.5
    assert prob.system_vector[13] == 0.0


def test_mass_matrix_integrates_volume_without_dirichlet():
    _, prob = _make(locations=lambda p: False)
    assert prob.mass_matrix.sum() == pytest.approx(8.0)
    assert np.allclose(prob.mass_matrix, prob.mass_matrix.T)


def test_stiffness_rows_sum_to_zero_and_symmetric():
    _, prob = _make(locations=lambda p: False)
    assert np.allclose(prob.stiffness_matrix.sum(axis=1), 0.0)
    assert np.allclose(prob.stiffness_matrix, prob.stiffness_matrix.T)


def test_dirichlet_rows_of_matrices_are_zero():
    _, prob = _make()
    for dof in prob.dirichlet_dofs:
        assert not prob.mass_matrix[dof].any()
        assert not prob.stiffness_matrix[dof].any()


def test_reaction_with_unit_source_gives_unit_solution():
    _, prob = _make(locations=lambda p: False)
    prob.reaction_coefficient = 1.0
    prob.diffusion_coefficient = 1.0
    prob.reset_system_matrix()
    prob.reset_system_vector()
    prob.add_source(lambda p: 1.0)
    prob.assemble()
    u = prob.solve()
    assert np.allclose(u, 1.0)
    assert np.allclose(prob.solution, u)


def test_linear_dirichlet_data_reproduced_exactly():
    g = lambda p: p[0] - 2 * p[1] + 3 * p[2]
    grid, prob = _make(n=4, values=g)
    prob.diffusion_coefficient = 1.0
    prob.assemble()
    u = prob.solve()
    expected = np.array([g(p) for p in grid.points])
    assert np.allclose(u, expected)


def test_add_discrete_source_matches_mass_product():
    grid, prob = _make(locations=lambda p: False)
    prob.reset_system_vector()
    vec = grid.points[:, 2] ** 2
    prob.add_discrete_source(vec)
    assert np.allclose(prob.system_vector, prob.mass_matrix @ vec)


def test_add_discrete_source_rejects_wrong_length():
    _, prob = _make()
    with pytest.raises(ValueError):
        prob.add_discrete_source(np.ones(5))


def test_add_source_leaves_dirichlet_entries():
    _, prob = _make(values=lambda p: 1.0)
    before = prob.system_vector.copy()
    prob.add_source(lambda p: 1.0)
    for dof in prob.dirichlet_dofs:
        assert prob.system_vector[dof] == before[dof]
    assert prob.system_vector[13] > 0.0


def test_source_total_equals_mass_times_ones():
    _, prob = _make(locations=lambda p: False)
    prob.reset_system_vector()
    prob.add_source(lambda p: 1.0)
    assert np.allclose(prob.system_vector, prob.mass_matrix @ np.ones(27))


def test_resets_clear_system():
    _, prob = _make()
    prob.reset_system_matrix()
    prob.reset_system_vector()
    assert not prob.system_matrix.any()
    assert not prob.system_vector.any()


def test_solution_setter_copies():
    _, prob = _make()
    vec = np.arange(27, dtype=float)
    prob.solution = vec
    vec[0] = 100.0
    assert prob.solution[0] == 0.0


def test_show_requires_solution(tmp_path):
    _, prob = _make()
    with pytest.raises(ValueError):
        prob.show(tmp_path / "out.dat")


def test_show_writes_points_and_values(tmp_path):
    grid, prob = _make()
    prob.solution = np.arange(27, dtype=float)
    path = prob.show(tmp_path / "out.dat")
    data = np.loadtxt(path)
    assert data.shape == (27, 4)
    assert np.allclose(data[:, :3], grid.points)
    assert np.allclose(data[:, 3], np.arange(27))
    assert path.read_text().splitlines()[0] == "-1 -1 -1 0"