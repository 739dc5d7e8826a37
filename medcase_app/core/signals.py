"""
Central signal registry.

Uses blinker so the case engine can announce events without knowing who
listens (scoring dashboards, review mode, tests).

Usage:
    from medcase_app.core.signals import answers_shuffled

    @answers_shuffled.connect
    def on_shuffled(sender, **kwargs):
        ...
"""
from blinker import Namespace

case_signals = Namespace()

# Fired when a new presentation order is computed for a case.
# Payload: case_id, fingerprint, correct_index
answers_shuffled = case_signals.signal('answers_shuffled')

# Fired after an answer has been graded.
# Payload: user_id, case_id, is_correct, points, matched_by
case_answered = case_signals.signal('case_answered')
