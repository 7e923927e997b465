import sys

from gurl.server import main


sys.exit(main())
