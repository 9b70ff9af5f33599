import argparse
import json
import random
from typing import List

from config import DEFAULT_RING_BITS
from logger import Logger
from simulation import ChordSimulation


def check_partition(sim: ChordSimulation) -> List[str]:
    """
    Every identifier must be owned by exactly one member. Returns a list of
    problems, empty when the key sets partition the space.
    """
    if not sim.members():
        return []
    counts = [0] * sim.size
    for keys in sim.key_sets.values():
        for k in keys:
            counts[k] += 1
    problems = []
    for k, c in enumerate(counts):
        if c != 1:
            problems.append(f"id {k} owned {c} times")
    return problems


def run_workload(sim: ChordSimulation, num_ops: int, rng: random.Random):
    """Random (target, start) lookups against the current ring."""
    if not sim.members():
        return
    for _ in range(num_ops):
        start = rng.choice(sim.members())
        target = rng.randrange(sim.size)
        sim.lookup(target, start)


def run_scale_experiment(bits: int, num_nodes: int, num_ops: int, seed=None) -> dict:
    sim = ChordSimulation(bits=bits, seed=seed)
    sim.add_random_nodes(num_nodes)
    run_workload(sim, num_ops, random.Random(seed))
    return sim.metrics.snapshot()


def run_churn_experiment(bits: int, num_nodes: int, num_ops: int,
                         churn_every: int, seed=None) -> dict:
    """
    Simple churn experiment:
    - Start a ring of num_nodes.
    - Every churn_every lookups remove a random node and add a fresh one,
      checking the key partition after each mutation.
    """
    rng = random.Random(seed)
    sim = ChordSimulation(bits=bits, seed=seed)
    sim.add_random_nodes(num_nodes)

    for i in range(num_ops):
        if churn_every and i and i % churn_every == 0:
            if len(sim.members()) > 1:
                victim = sim.remove_random_node()
                print(f"[CHURN] Removed node {victim}")
            else:
                print("[CHURN] Skipped removal, single node left")
            problems = check_partition(sim)
            if problems:
                raise AssertionError(f"key partition broken: {problems}")
            if len(sim.members()) < sim.size:
                joined = sim.add_node()
                print(f"[CHURN] Added node {joined}")
            problems = check_partition(sim)
            if problems:
                raise AssertionError(f"key partition broken: {problems}")
        run_workload(sim, 1, rng)

    return sim.metrics.snapshot()


def main():
    parser = argparse.ArgumentParser(description="Chord ring routing experiment harness")
    parser.add_argument("--mode", choices=["scale", "churn"], required=True,
                        help="Which experiment to run.")
    parser.add_argument("--bits", type=int, default=DEFAULT_RING_BITS)
    parser.add_argument("--num-nodes", type=int, default=4)
    parser.add_argument("--num-ops", type=int, default=100)
    parser.add_argument("--churn-every", type=int, default=10,
                        help="Lookups between churn events (churn mode only).")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()
    if args.num_nodes < 1:
        parser.error("--num-nodes must be at least 1")
    Logger.set_level(args.log_level)

    if args.mode == "scale":
        result = run_scale_experiment(args.bits, args.num_nodes, args.num_ops, args.seed)
    else:
        result = run_churn_experiment(args.bits, args.num_nodes, args.num_ops,
                                      args.churn_every, args.seed)
    print("=== Metrics ===")
    print(json.dumps(result, indent=2))


if __name__ == "__main__":
    main()
