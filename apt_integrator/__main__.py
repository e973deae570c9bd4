from apt_integrator.main import main

main()
