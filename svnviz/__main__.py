"""Allow running as ``python -m svnviz``."""

from svnviz.svnviz import main

if __name__ == '__main__':
    main()
