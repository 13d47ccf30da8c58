from app_driver.cli import main

main()
