import matplotlib.pyplot as plt

from config import DEFAULT_ROOT_TASK, TRACE_DEMO
from domains import dinner_domain, initialize_state
from htn_planner import HTNPlanner
from log import logger
from planner_trace import LoggingTrace, RecordingTrace
from plan_evaluator import evaluate_plans, summarize
from visualization import plot_search_tree

SCENARIOS = [
    ("Cook at home", {}),
    ("Order takeout", {"can_cook": False}),
    ("Nothing to eat", {"can_cook": False, "cash": 0}),
]


def run_scenario(planner, title, overrides, visualize=False):
    state = initialize_state(**overrides)
    trace = RecordingTrace() if visualize else (LoggingTrace() if TRACE_DEMO else None)
    plan = planner.plan(DEFAULT_ROOT_TASK, state, trace)

    logger.info(f"=== {title} ===")
    logger.info(f"Initial state: {state.to_string()}")
    if plan is None:
        print(f"{title}: no plan")
        return None

    print(f"{title}: {' '.join(str(action) for action in plan)}")
    logger.info(f"Plan: {list(plan)}")
    logger.info(f"Final state: {plan.state.to_string()}")
    if visualize:
        plot_search_tree(trace, title=title)
    return plan


def main():
    planner = HTNPlanner(dinner_domain)

    # 1) Plan each demo scenario
    for title, overrides in SCENARIOS:
        run_scenario(planner, title, overrides)

    # 2) Sweep cash/cooking combinations
    states = [initialize_state(cash=cash, can_cook=can_cook)
              for cash in range(0, 50, 5)
              for can_cook in (True, False)]
    summary = summarize(evaluate_plans(dinner_domain, states))
    print(f"Planned {summary['runs']} states, mean plan length {summary['mean_length']:.2f}")

    # 3) Show the search tree of the fallback scenario
    run_scenario(planner, *SCENARIOS[1], visualize=True)
    plt.show()


if __name__ == "__main__":
    main()
