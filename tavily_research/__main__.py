import sys

from tavily_research.main import main

sys.exit(main())
