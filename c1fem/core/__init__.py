from .grid import Grid, DOFS_PER_NODE
from .topology import adjacent_nodes, renumber_nodes
from .dofhandler import sparsity_pattern, sparsity_matrix, bandwidth
__all__=['Grid','DOFS_PER_NODE','adjacent_nodes','renumber_nodes','sparsity_pattern','sparsity_matrix','bandwidth']
