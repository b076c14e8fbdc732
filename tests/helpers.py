class ScriptedRng:
    """Stands in for random.Random, replaying fixed draws and recording bounds."""

    def __init__(self, draws):
        self.draws = list(draws)
        self.stops = []

    def randrange(self, stop):
        self.stops.append(stop)
        draw = self.draws.pop(0)
        assert 0 <= draw < stop, f"scripted draw {draw} outside [0, {stop})"
        return draw
