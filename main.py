from csv_grid.app import main


if __name__ == "__main__":
    main()
