from loggenerator import Level, TOTAL_RANGE


def expected_counts(ranges: list[int], draws: int) -> dict[Level, int]:
    return {
        level: round(width / TOTAL_RANGE * draws)
        for level, width in zip(Level, ranges)
    }


def counts_within(counts: dict[Level, int], expected: dict[Level, int], allowed_deviance: int) -> list[str]:
    """
    Return a list of descriptions of each level whose count is outside the
    allowed deviance from its expected count (or present, when 0 was expected).
    """
    problems = []
    for level, expected_count in expected.items():
        if expected_count == 0:
            if level in counts:
                problems.append(f"{level.label} messages found: {counts[level]}")
        elif abs(counts.get(level, 0) - expected_count) > allowed_deviance:
            problems.append(f"{level.label} count {counts.get(level, 0)}, expected about {expected_count}")
    return problems


if __name__ == '__main__':
    assert(expected_counts([0, 6000, 12000, 30000, 12000, 0], 2000)[Level.INFO] == 1000)
    assert(not counts_within({Level.INFO: 1010}, {Level.INFO: 1000, Level.FATAL: 0}, 50))
    assert(counts_within({Level.INFO: 1010, Level.FATAL: 1}, {Level.INFO: 1000, Level.FATAL: 0}, 50))
