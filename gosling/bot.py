from gosling.agent import GoslingAgent
from gosling.routines import atba, goto_boost, kickoff

# An example strategy: kickoff when there is one, grab a big pad when low, otherwise chase the ball
# This is the file rlbot loads, so the agent class has to live here


class ExampleBot(GoslingAgent):
    def run(self):
        if not self.stack.is_empty():
            return
        if self.kickoff_flag:
            self.push(kickoff())
            return
        large_boosts = [boost for boost in self.boosts if boost.large and boost.active]
        if self.me.boost < 30 and len(large_boosts) > 0:
            closest = min(large_boosts, key=lambda boost: boost.location.dist(self.me.location))
            self.push(goto_boost(closest, self.ball.location))
        else:
            self.push(atba())
