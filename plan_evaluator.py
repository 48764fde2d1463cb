# plan_evaluator.py
from collections import Counter

import numpy as np
from tqdm import tqdm

from config import DEFAULT_ROOT_TASK
from htn_planner import HTNPlanner
from log import logger
from planner_trace import RecordingTrace


def evaluate_plans(domain, states, root=DEFAULT_ROOT_TASK, progress=True):
    """
    Plan ``root`` from each of ``states`` and record the outcome.

    Every search gets its own RecordingTrace, so failure counts are per run.

    Args:
        domain (Domain): Domain holding ``root``.
        states (iterable): Initial world states.
        root (str): Root task name.
        progress (bool): Show a tqdm progress bar.

    Returns:
        list: One dict per state with ``index``, ``success``, ``plan``,
        ``length``, ``failures`` and ``final_state``.
    """
    planner = HTNPlanner(domain)
    root_task = domain.resolve(root)
    results = []
    for index, state in enumerate(tqdm(states, desc=f"Planning {root}", disable=not progress)):
        trace = RecordingTrace()
        plan = planner.plan(root_task, state, trace)
        results.append({
            "index": index,
            "success": plan is not None,
            "plan": list(plan) if plan is not None else None,
            "length": len(plan) if plan is not None else 0,
            "failures": Counter(e.detail for e in trace.failures),
            "final_state": plan.state if plan is not None else None,
        })
    return results


def summarize(results):
    """Aggregate the rows produced by ``evaluate_plans``."""
    lengths = np.array([r["length"] for r in results if r["success"]], dtype=float)
    actions = Counter()
    failures = Counter()
    for r in results:
        if r["success"]:
            actions.update(r["plan"])
        failures.update(r["failures"])

    runs = len(results)
    successes = int(lengths.size)
    summary = {
        "runs": runs,
        "successes": successes,
        "success_rate": successes / runs if runs > 0 else 0.0,
        "mean_length": float(np.mean(lengths)) if successes else 0.0,
        "std_length": float(np.std(lengths)) if successes else 0.0,
        "max_length": int(np.max(lengths)) if successes else 0,
        "actions": actions,
        "failures": failures,
    }
    logger.info("=== Plan Evaluation ===")
    logger.info(f"Runs: {runs}, successes: {successes} ({summary['success_rate']:.0%})")
    logger.info(f"Plan length: mean {summary['mean_length']:.2f}, max {summary['max_length']}")
    logger.info(f"Failures by kind: {dict(failures)}")
    return summary
