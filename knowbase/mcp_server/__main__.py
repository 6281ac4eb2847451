import asyncio

from knowbase.mcp_server.server import main

asyncio.run(main())
