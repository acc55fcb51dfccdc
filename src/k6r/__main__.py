from k6r.cli import main

main()
