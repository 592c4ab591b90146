import logging
import math
from ez_over import Cell, Over, OverRef, OverUtils, over_mut

def add_one(input: int) -> int:
    return input + 1

def double(input: int) -> int:
    return input * 2

def s_root(input: int) -> float:
    return math.sqrt(input)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    chain = Over(add_one) | double | OverUtils.Logger("after-double") | s_root
    print(f"{7 | chain=}")

    ans, err = chain.run(-2)
    print(f"{ans=}, {bool(err)=}")

    samples = [4, 1, 3]
    over_mut(samples, lambda xs: xs.sort())
    largest = samples | OverRef(lambda xs: xs[-1])
    print(f"{samples=}, {largest=}")

    counter = Cell(5)
    over_mut(counter, lambda r: r.set(r.get() * 3 + 1))
    print(f"{counter=}")
