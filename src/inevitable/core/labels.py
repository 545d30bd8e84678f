"""
Attempt-driven copy for the evading control and the feedback line.

Pools are plain data so a caller can swap in its own wording; only the
selection rules live here.
"""

from dataclasses import dataclass
from typing import Callable, Tuple, Union


@dataclass(frozen=True)
class LabelPool:
    """
    Three-tier label source.

    - literals: exact text for attempts below len(literals)
    - cycle: rotating text for everything after that
    - templates: from ``template_from`` on, every ``template_period``-th
      attempt uses a template: a string with ``{n}`` (attempt count)
      interpolated, or a callable taking the count for derived values
    """
    literals: Tuple[str, ...]
    cycle: Tuple[str, ...]
    templates: Tuple[Union[str, Callable[[int], str]], ...] = ()
    template_from: int = 50
    template_period: int = 3

    def __post_init__(self):
        if not self.literals or not self.cycle:
            raise ValueError("LabelPool needs at least one literal and one cycle entry")
        if self.template_period < 1:
            raise ValueError("template_period must be >= 1")

    def label(self, attempts: int) -> str:
        if attempts < 0:
            raise ValueError(f"attempts must be >= 0, got {attempts}")
        if attempts < len(self.literals):
            return self.literals[attempts]
        if (self.templates and attempts >= self.template_from
                and attempts % self.template_period == 0):
            template = self.templates[attempts % len(self.templates)]
            if callable(template):
                return template(attempts)
            return template.format(n=attempts)
        return self.cycle[(attempts - len(self.literals)) % len(self.cycle)]


FEEDBACK = LabelPool(
    literals=(
        "",
        "Wait, don't you want to know what happens if you say yes?",
        "I promise this will be the best decision you make today!",
        "Come on... you know you're curious!",
        "What if saying yes unlocks something magical?",
        "The universe is conspiring for you to say yes!",
        "Even this button doesn't want you to say no... see?",
        "Plot twist: the 'No' button is allergic to being clicked!",
        "Fun fact: everyone who said yes was happy they did!",
        "Chocolates, flowers and endless affection are waiting...",
        "Saying yes is proven to increase happiness by 1000%!",
        "The button runs because it knows yes is the right answer!",
        "Even the laws of physics are on my side here!",
        "What if I said pretty please with a cherry on top?",
        "This is your sign to say YES!",
        "The button has given up... but my hope never will!",
        "Honestly? I really, REALLY want you to say yes!",
        "You're making this adorably difficult, but I'm not giving up!",
        "Challenge: click 'No' successfully. Spoiler: you can't!",
        "At this point yes is inevitable... embrace it!",
    ),
    cycle=(
        "You're incredibly persistent... but yes is still the answer!",
        "The button is exhausted, I'm hopeful, and you're amazing. Yes?",
        "Plot twist: you wanted to say yes all along!",
        "I prepared a whole speech for your yes, don't let it go to waste!",
        "Your determination is really cute. But still... yes?",
        "I could do this all day. The button? Not so much.",
        "The 'No' button is filing a restraining order against your cursor!",
        "This is a romantic comedy, and the ending is you saying YES!",
        "The button is playing hard to get. You're not, right?",
        "Fun fact: 'No' doesn't exist in the language of love!",
        "The button is getting dizzy from all this running around!",
        "I'm starting to think you enjoy watching it escape!",
        "Confession: I've been practicing my happy dance for your yes!",
        "The button just asked if it can retire... please say yes!",
        "Achievement unlocked: Master of Evasion! Next: Master of Yes!",
    ),
    templates=(
        "Attempt #{n}: the button is getting creative with its escapes!",
        "{n} tries and counting! Your determination is impressive!",
        lambda n: f"The button has now traveled {n * 10} pixels trying to escape!",
        lambda n: f"Fun stat: you've spent {n * 2} seconds not saying yes!",
        "The button's fitness tracker shows {n} evasive maneuvers!",
        "After {n} attempts, the button is considering a career change!",
        "{n} times you've made me smile watching this! Now say yes?",
        "The button has filed {n} complaints about working conditions!",
    ),
)

BUTTON_LABELS = LabelPool(
    literals=(
        "No",
        "Are you sure?",
        "Really?",
        "Think again!",
        "Maybe yes?",
        "Last chance!",
        "Please?",
        "Come on...",
        "You sure?",
        "Positive?",
        "Reconsider?",
        "Pretty please?",
        "One more time?",
        "Final answer?",
        "You mean yes?",
    ),
    cycle=(
        "Still no?",
        "Seriously?",
        "Not giving up?",
        "Try again!",
        "Nope!",
        "Keep trying!",
        "Almost!",
        "So close!",
        "Nice try!",
        "Oops!",
    ),
)


def label(attempts: int, pool: LabelPool = FEEDBACK) -> str:
    """Feedback line for an attempt count (empty before the first attempt)."""
    return pool.label(attempts)


def button_label(attempts: int, pool: LabelPool = BUTTON_LABELS) -> str:
    return pool.label(attempts)
