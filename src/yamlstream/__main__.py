from .commands import ys

if __name__ == "__main__":  # pragma: no cover
    ys()
