from hub_scanner.main import main

if __name__ == "__main__":
    main()
