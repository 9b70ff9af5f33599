"""
Tests for the in-process experiment harness.
"""

from experiment_harness import check_partition, run_scale_experiment, run_churn_experiment
from simulation import ChordSimulation


class TestHarness:
    """Test experiment runs."""

    def test_scale(self):
        result = run_scale_experiment(bits=6, num_nodes=10, num_ops=50, seed=3)
        assert result["lookup"]["total_lookups"] == 50
        assert result["lookup"]["unresolved"] == 0
        assert result["ring"]["total_adds"] == 10

    def test_churn(self):
        result = run_churn_experiment(bits=5, num_nodes=6, num_ops=40, churn_every=5, seed=1)
        assert result["lookup"]["total_lookups"] == 40
        assert result["lookup"]["unresolved"] == 0
        assert result["ring"]["total_removes"] == 7

    def test_check_partition(self):
        sim = ChordSimulation(bits=3, seed=0)
        assert check_partition(sim) == []
        sim.add_random_nodes(3)
        assert check_partition(sim) == []
        sim.key_sets[sim.members()[0]] = []
        assert check_partition(sim) != []

    def test_empty_ring_skips_lookups(self):
        result = run_scale_experiment(bits=3, num_nodes=0, num_ops=5, seed=0)
        assert result["lookup"]["total_lookups"] == 0
