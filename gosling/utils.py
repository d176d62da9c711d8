import math
from collections import namedtuple

from gosling.objects import Vector3

# Small math helpers plus the steering/throttle controllers every routine drives with

MAX_SPEED = 2300
SUPERSONIC_SPEED = 2275

# How far the car has to rotate (in radians) to face a local target
TargetAngles = namedtuple("TargetAngles", ["pitch", "yaw", "roll"])


def cap(x, low, high):
    # clamps x into [low, high]
    return max(low, min(x, high))


def sign(x):
    # -1, 0 or 1
    if x < 0.0:
        return -1
    elif x > 0.0:
        return 1
    return 0


def steerPD(angle, rate):
    # cubic response: soft around zero, saturated a few degrees out
    return cap(((35 * (angle + rate)) ** 3) / 10, -1.0, 1.0)


def target_angles(car, local_target):
    up = car.local(Vector3(0, 0, 1))
    return TargetAngles(math.atan2(local_target.z, local_target.x),
                        math.atan2(local_target.y, local_target.x),
                        math.atan2(up.y, up.z))


def defaultPD(agent, local_target, direction=1.0):
    """Points the car at ``local_target`` and returns the ``TargetAngles`` it used.

    Steering is always written; pitch, yaw and roll only matter while airborne
    and are damped with the car's local angular velocity. A ``direction`` of -1
    aims the back of the car instead, for reversing onto a target.
    """
    angles = target_angles(agent.me, local_target * direction)
    spin = agent.me.angular_velocity
    controller = agent.controller
    controller.steer = steerPD(angles.yaw, 0) * direction
    controller.pitch = steerPD(angles.pitch, spin.y / 4)
    controller.yaw = steerPD(angles.yaw, -spin.z / 4)
    controller.roll = steerPD(angles.roll, spin.x / 2)
    return angles


def defaultThrottle(agent, target_speed, direction=1.0):
    # Throttle grows with the square of the speed error, boost only tops up a full throttle
    car_speed = agent.me.local_velocity().x
    error = target_speed * direction - car_speed
    throttle = cap(math.copysign(error ** 2 / 1000, error), -1.0, 1.0)
    agent.controller.throttle = throttle
    agent.controller.boost = throttle == 1.0 and error > 150 and car_speed < SUPERSONIC_SPEED
    return car_speed
