from csv_grid.app import main

main()
