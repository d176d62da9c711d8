from abc import ABC, abstractmethod

from gosling.objects import Vector3, side
from gosling.utils import MAX_SPEED, defaultPD, defaultThrottle

# Routines are the mechanical tasks the bot can do. A routine lives on the agent's stack and
# only runs while it is on top. Anything it needs between ticks is kept on the instance, so
# when a child routine pops itself the parent carries on from where it left off.

# Routines that head for a spot pop once they are this close to it (flat distance)
ARRIVED_DISTANCE = 350


class BaseRoutine(ABC):
    """A resumable unit of behaviour for the routine stack."""

    @abstractmethod
    def run(self, agent):
        """Runs one tick of this routine.

        May write to ``agent.controller``, push new routines with
        ``agent.push`` (they start next tick), or finish with ``agent.pop()``.
        A routine may only ever pop itself.
        """


def drive_at(agent, target, speed=MAX_SPEED):
    # steers and throttles towards a world location, returns the local target and its TargetAngles
    local_target = agent.me.local_location(target)
    angles = defaultPD(agent, local_target)
    defaultThrottle(agent, speed)
    return local_target, angles


def approach(destination, car_location, facing):
    """Returns a point to aim at so the car crosses ``destination`` heading along ``facing``.

    The aim point sits behind ``destination`` on the ``facing`` line and slides
    onto it as the car closes in, which curves the path into the right heading.
    """
    distance = (destination - car_location).flatten().magnitude()
    return destination - facing.flatten().normalize() * min(distance / 2, 1000)


def should_dodge(angles, speed, distance):
    # only dodge when lined up at speed with time to land before arriving
    return abs(angles.yaw) < 0.05 and 600 < speed < 2150 and distance / speed > 2.0


class atba(BaseRoutine):
    # Always Towards the Ball Agent: chases the ball at full speed and never finishes
    def run(self, agent):
        drive_at(agent, agent.ball.location)


class flip(BaseRoutine):
    """Dodges towards a local ``vector``, then hands over to ``recovery``.

    The first jump is held for ``JUMP_TIME``, jump is released for
    ``RELEASE_TICKS`` ticks, then the second jump is held together with the
    dodge direction. ``cancel`` cuts the dodge short at ``CANCEL_TIME`` so the
    car can half-flip out of a backflip.
    """

    JUMP_TIME = 0.15
    RELEASE_TICKS = 3
    CANCEL_TIME = 0.3
    DODGE_TIME = 0.9

    def __init__(self, vector, cancel=False):
        direction = vector.normalize()
        # forward is negative pitch on the controller
        self.pitch = -direction.x
        self.yaw = direction.y
        self.cancel = cancel
        self.start_time = None
        self.released_ticks = 0

    def run(self, agent):
        if self.start_time is None:
            self.start_time = agent.time
        elapsed = agent.time - self.start_time
        controller = agent.controller

        if elapsed < self.JUMP_TIME:
            controller.jump = True
        elif self.released_ticks < self.RELEASE_TICKS:
            self.released_ticks += 1
        elif elapsed < (self.CANCEL_TIME if self.cancel else self.DODGE_TIME):
            controller.jump = True
            controller.pitch = self.pitch
            controller.yaw = self.yaw
        else:
            agent.pop()
            agent.push(recovery())


class goto_boost(BaseRoutine):
    # Drives over a boost pad, optionally lined up to continue towards target afterwards
    def __init__(self, boost, target=None):
        self.boost = boost
        self.target = target

    def run(self, agent):
        pad = self.boost.location
        distance = (pad - agent.me.location).flatten().magnitude()
        if not self.boost.active or agent.me.boost >= 99 or distance < ARRIVED_DISTANCE:
            agent.pop()
            return

        agent.line(pad - Vector3(0, 0, 500), pad + Vector3(0, 0, 500), [0, 255, 0])

        aim = pad if self.target is None else approach(pad, agent.me.location, self.target - pad)
        local_target, angles = drive_at(agent, aim)
        agent.controller.boost = self.boost.large and abs(angles.yaw) < 0.3
        agent.controller.handbrake = abs(angles.yaw) > 2.3

        speed = 1 + agent.me.velocity.magnitude()
        if agent.me.airborne:
            agent.push(recovery(self.target))
        elif should_dodge(angles, speed, distance):
            agent.push(flip(local_target))


class kickoff(BaseRoutine):
    # 1v1 kickoff: drive to just behind the ball, then dodge through it at the foe goal
    BEHIND_BALL = 200
    DODGE_DISTANCE = 650

    def run(self, agent):
        target = agent.ball.location + Vector3(0, side(agent.team) * self.BEHIND_BALL, 0)
        local_target, _ = drive_at(agent, target)
        if local_target.magnitude() < self.DODGE_DISTANCE:
            agent.pop()
            agent.push(flip(agent.me.local_location(agent.foe_goal.location)))


class recovery(BaseRoutine):
    # Lands wheels-down, facing target if one is given and otherwise along our flat velocity
    def __init__(self, target=None):
        self.target = target

    def run(self, agent):
        facing = agent.me.velocity if self.target is None else self.target - agent.me.location
        defaultPD(agent, agent.me.local(facing.flatten()))
        agent.controller.throttle = 1.0
        if not agent.me.airborne:
            agent.pop()
