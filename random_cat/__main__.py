from random_cat.app import main

main()
