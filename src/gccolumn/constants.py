# Normalized conditions for flow [K], [Pa(a)]
TN = 298.15
PN = 101300.0

# Reference temperature of the Blumberg viscosity fit [K]
TST = 298.15

# Molar gas constant [J/(mol·K)], exact SI (2019 redefinition)
R_MOLAR = 8.31446261815324

QUAD_RTOL = 1e-3
QUAD_ATOL = 1e-3

# D_M / D_S, fixed empirical ratio for the stationary phase
DM_OVER_DS = 10000.0

# Fuller-Schettler-Giddings aromatic/heterocyclic ring increment [cm³]
RING_INCREMENT = 18.3

