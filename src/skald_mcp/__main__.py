from skald_mcp.cli.main import main

main()
