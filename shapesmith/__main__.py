from shapesmith.cli import main

main()
