from qotd.server import main

main()
