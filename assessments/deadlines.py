# assessments/deadlines.py
import math
import time

from .phases import PHASE_DURATION_SECONDS


class DeadlineTracker:
    """
    Countdown for one phase, anchored to a persisted start instant so a page
    reload cannot reset it.

    `slots` is any mutable mapping local to the candidate's session (the
    Django session in the HTTP layer). The anchor is written once and only
    removed after a confirmed submission.
    """

    def __init__(self, slots, clock=None, duration=PHASE_DURATION_SECONDS):
        self.slots = slots
        self.clock = clock if clock is not None else time.time
        self.duration = duration

    @staticmethod
    def slot_key(examination_id, phase):
        return f"examTimer_{examination_id}_{phase}"

    def anchor(self, examination_id, phase):
        value = self.slots.get(self.slot_key(examination_id, phase))
        return float(value) if value is not None else None

    def start(self, examination_id, phase, now=None):
        key = self.slot_key(examination_id, phase)
        if self.slots.get(key) is None:
            self.slots[key] = self.clock() if now is None else now
        return float(self.slots[key])

    def remaining(self, examination_id, phase):
        now = self.clock()
        anchor = self.start(examination_id, phase, now=now)
        return self._remaining_at(anchor, now)

    def expired(self, examination_id, phase):
        # Never starts a clock: a phase nobody opened has not expired
        anchor = self.anchor(examination_id, phase)
        if anchor is None:
            return False
        return self._remaining_at(anchor, self.clock()) == 0

    def clear(self, examination_id, phase):
        self.slots.pop(self.slot_key(examination_id, phase), None)

    def _remaining_at(self, anchor, now):
        elapsed = math.floor(now - anchor)
        return min(max(int(self.duration - elapsed), 0), int(self.duration))
