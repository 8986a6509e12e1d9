from conftest import ScriptedSampler

from roadmap_planner.planners.prm import PRMPlanner, Search
from roadmap_planner.utils.config_loader import load_planner_params


def test_packaged_parameters_load() -> None:
    params = load_planner_params("prm_sparse")
    assert params["max_degree"] == 8
    assert params["max_radius"] == 0.5
    assert params["search"] == "astar"
    assert params["connect_same_component"] is False


def test_unknown_planner_gives_empty_parameters(tmp_path) -> None:
    config = tmp_path / "params.yaml"
    config.write_text("prm:\n  max_neighbors: 4\n")
    assert load_planner_params("rrt", config_path=str(config)) == {}
    assert load_planner_params("prm", config_path=str(config)) == {"max_neighbors": 4}


def test_parameters_configure_planner(metric, free_verifier) -> None:
    params = load_planner_params("prm_dijkstra")
    planner = PRMPlanner(metric, free_verifier, ScriptedSampler([]), parameters=params)
    assert planner.search is Search.DIJKSTRA
    assert planner.max_neighbors == 30
    assert planner.max_degree == float("inf")
    assert planner.max_radius == float("inf")
