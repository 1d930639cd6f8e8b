from pyweave.console.artisan import main

if __name__ == '__main__':
    main()
