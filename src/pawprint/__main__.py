from pawprint._cli import main

main()
