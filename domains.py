from domain import Domain
from state import WorldState

TAKEOUT_COST = 20


class DinnerState(WorldState):
    def __init__(self, hungry=False, food_in_fridge=False, can_cook=False, cash=0, dishes=False):
        self.hungry = hungry
        self.food_in_fridge = food_in_fridge
        self.can_cook = can_cook
        self.cash = cash
        self.dishes = dishes


def initialize_state(**overrides):
    """Hungry, with food in the fridge, able to cook and 30 in cash."""
    facts = dict(hungry=True, food_in_fridge=True, can_cook=True, cash=30, dishes=False)
    facts.update(overrides)
    return DinnerState(**facts)


def condition_can_afford(s, cost):
    """Return True if there is enough cash to pay ``cost``."""
    return s.cash >= cost


def condition_food_in_fridge(s):
    return s.food_in_fridge


def condition_can_cook(s):
    return s.can_cook


def condition_hungry(s):
    return s.hungry


def condition_dirty_dishes(s):
    return s.dishes


def effect_pay(s, cost):
    s.cash -= cost


def effect_cook(s):
    s.food_in_fridge = False
    s.dishes = True


def effect_eat(s):
    s.hungry = False


def effect_wash(s):
    s.dishes = False


def build_dinner_domain():
    """
    Build the "have dinner" domain.

    do_something prefers have_dinner over watch_tv; have_dinner is
    get_dinner -> eat_dinner -> clean_up, where get_dinner prefers cooking
    over ordering takeout and clean_up washes the dishes only if there are any.
    """
    dinner = Domain("dinner")

    # Primitives
    dinner.primitive("order_takeout",
                     variables={"cost": lambda s: TAKEOUT_COST},
                     precondition=condition_can_afford,
                     effects=effect_pay)
    dinner.primitive("cook_dinner",
                     precondition=[condition_food_in_fridge, condition_can_cook],
                     effects=effect_cook)
    dinner.primitive("eat_dinner", effects=effect_eat)
    dinner.primitive("wash_dishes",
                     precondition=condition_dirty_dishes,
                     effects=effect_wash)
    dinner.primitive("watch_tv")

    # Methods
    dinner.selector("get_dinner", ["cook_dinner", "order_takeout"])
    dinner.selector("clean_up", ["wash_dishes", "null_action"])
    dinner.sequence("have_dinner", ["get_dinner", "eat_dinner", "clean_up"],
                    precondition=condition_hungry)
    dinner.selector("do_something", ["have_dinner", "watch_tv"])

    return dinner.validate()


dinner_domain = build_dinner_domain()
