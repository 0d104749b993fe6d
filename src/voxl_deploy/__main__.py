from voxl_deploy import main

main()
