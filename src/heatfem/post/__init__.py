from heatfem.post.results import element_vertex_samples, plot_solution, write_gnuplot_results, write_vtu

__all__ = ["element_vertex_samples", "plot_solution", "write_gnuplot_results", "write_vtu"]
