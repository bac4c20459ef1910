from rainfx.cli import main

main()
