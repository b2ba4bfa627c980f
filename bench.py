import cProfile
import pstats

from tromp import L, V, church_numeral, church_to_int, layout


def main():
    succ = L("n", "f", "x")._("f").call(V("n").call("f").call("x")).build()

    term = church_numeral(0)
    for i in range(30):
        term = succ(term)
        layout(term.reduce())
    assert church_to_int(term) == 30


if __name__ == "__main__":
    with cProfile.Profile() as profile:
        main()
        print("bench done")
        results = pstats.Stats(profile)
        results.sort_stats(pstats.SortKey.TIME)
        results.dump_stats("results.profile")
