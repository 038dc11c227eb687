from trellis import ok


def test_one():
    return ok()


def test_two():
    return ok()
