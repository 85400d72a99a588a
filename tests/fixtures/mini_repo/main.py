"""Entry point for the mini fixture."""

from pkg_a.use_core import run

if __name__ == "__main__":
    print(run())
